"""
Split CLI entry point, same options as main.py.
"""
from main import main

if __name__ == '__main__':
    main()
