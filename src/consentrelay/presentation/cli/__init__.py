from .main import create_parser, run_cli, main

__all__ = ["create_parser", "run_cli", "main"]
