"""Allow ``python -m ts_expect_error``."""

from .cli import app

if __name__ == "__main__":
    app()
