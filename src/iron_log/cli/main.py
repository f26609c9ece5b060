"""
CLI entry point using Typer.

Provides commands for the training and nutrition core:
- compare / e1rm: set-to-set performance feedback
- set-range parse / serialize: set ranges embedded in exercise notes
- volume classify / week: weekly volume against landmarks
- schedule build / save / show / today: weekly training schedules
- macros: daily nutrition targets
- recommend: split template from the program designer questionnaire
"""

from .app import app
from .commands import nutrition, performance, program, schedule, set_range, volume  # noqa: F401  (registers commands)

__all__ = ["app"]


def main() -> None:
    app()


if __name__ == "__main__":
    main()
