"""Module entrypoint for ``python -m docmenu``.

All argument parsing and build steps happen in ``docmenu.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
