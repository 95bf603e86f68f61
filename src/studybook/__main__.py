"""Allow ``python -m studybook``."""

from studybook.cli import app

if __name__ == "__main__":
    app()
