# main.py
from eth_explorer.cli.cli import main

if __name__ == "__main__":
    main()
