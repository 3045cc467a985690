"""Module entrypoint for ``python -m chopsticks``.

All argument parsing and runtime setup happen in ``chopsticks.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
