"""Allow ``python -m folio`` to run the build command."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    main()
