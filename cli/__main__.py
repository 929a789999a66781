"""
Entry point for running the CLI as a module: `python -m cli`

Examples:
  python -m cli types
  python -m cli show --embeds ./assets --config-type yaml --app-name app
"""

from cli import main

if __name__ == "__main__":
    main()
