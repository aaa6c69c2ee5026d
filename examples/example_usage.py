"""Ví dụ: dựng lịch tháng của một nhân viên (không qua Flask).

Chạy: python -m examples.example_usage <user_id> [year] [month]
"""

import asyncio
import importlib
import sys

from dotenv import load_dotenv

from config import get_settings_module

from src.hr_calendar.hr_calendar.container import build_container_from_settings


def render(calendar) -> str:
    header = f"{calendar.year:04d}-{calendar.month:02d} (user {calendar.user_id})"
    cells = ["  ."] * calendar.leading_blanks
    for n, cell in enumerate(calendar.cells, start=1):
        mark = "*" if calendar.today and calendar.today.day == n else " "
        cells.append(f"{mark}{n:2d}" if cell is None else f"{mark}{cell.kind.value[:2].upper()}")
    cells += ["  ."] * calendar.trailing_blanks
    weeks = [" ".join(cells[i:i + 7]) for i in range(0, len(cells), 7)]
    lines = [header, *weeks]
    for error in calendar.errors:
        lines.append(f"! {error}")
    return "\n".join(lines)


def main(argv=None):
    argv = list(sys.argv[1:] if argv is None else argv)
    user_id = int(argv[0]) if argv else 1
    year = int(argv[1]) if len(argv) > 1 else None
    month = int(argv[2]) if len(argv) > 2 else None

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container_from_settings(settings)
    calendar = asyncio.run(container.calendar_builder.build(user_id, year, month))
    print(render(calendar))


if __name__ == "__main__":
    main()
