"""Entry point for running skillscope as a module.

    python -m skillscope
"""

from skillscope.cli.main import main

if __name__ == "__main__":
    main()
