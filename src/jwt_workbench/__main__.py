"""
Top-level entry point: python -m jwt_workbench <command>

Commands:
    decode    — inspect a token without signature verification
    verify    — check a token's signature
    generate  — build and sign a new token
"""

from .cli import main

if __name__ == "__main__":
    main()
