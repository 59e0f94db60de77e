"""Run the API server.

Usage:
    python -m jobboard
"""
import uvicorn

from jobboard.core import config


def main() -> None:
    uvicorn.run('jobboard.main:app', host='0.0.0.0', port=config.PORT)


if __name__ == "__main__":
    main()
