#!/usr/bin/env python3
"""
Convenience entry point when the package is not installed.

Usage:
    python3 jwt-workbench.py decode <token>
    python3 jwt-workbench.py verify <token> --secret my-secret
    python3 jwt-workbench.py generate --secret my-secret --claim sub=123

This shim delegates to the jwt_workbench package under src/.
"""

import os
import sys

# Ensure the src/ directory is on the Python path so the package can be found
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

from jwt_workbench.cli import main

if __name__ == "__main__":
    main()
