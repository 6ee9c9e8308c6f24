"""
Sample ledger generator for the Wager History desk.

Produces a deterministic JSON file of history records, shaped exactly like
the `/history-by-uid` response, that obey the number and bet-type rules.
Useful for demos, fixtures and exercising a mock ledger API.
"""

from __future__ import annotations

import json
import random
import sys
import time
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List

import typer

from wager_history.domain.filtering import DEFAULT_BUCKETS
from wager_history.domain.validation import DIGIT_PRIORITY

app = typer.Typer(help="Generate a synthetic history ledger as JSON.")

# Bucket type ids grouped by the number length they accept.
_TYPES_BY_LENGTH = {
    1: [b for b in DEFAULT_BUCKETS if b.key in ("open", "close")],
    2: [b for b in DEFAULT_BUCKETS if b.key == "jodi"],
    3: [b for b in DEFAULT_BUCKETS if b.key in ("openPana", "closePana")],
}


def _sample_number(rng: random.Random, length: int) -> str:
    digits = [rng.randint(0, 9) for _ in range(length)]
    if length == 3:
        digits.sort(key=lambda d: DIGIT_PRIORITY[d])
    return "".join(str(d) for d in digits)


def _generate_records(
    rows: int,
    seed: int,
    business_date: date,
    user_id: int = 1,
    game_id: int = 1,
    game_name: str = "Main Bazar",
    group_id: int = 1,
    group_name: str = "Default",
) -> List[Dict[str, Any]]:
    rng = random.Random(seed)
    opened = datetime.combine(business_date, datetime.min.time()).replace(hour=9)
    records: List[Dict[str, Any]] = []
    for i in range(rows):
        length = rng.choice([1, 2, 3])
        bucket = rng.choice(_TYPES_BY_LENGTH[length])
        created = opened + timedelta(minutes=rng.randint(0, 12 * 60))
        modified = created + timedelta(minutes=rng.randint(1, 30)) if rng.random() < 0.2 else None
        records.append(
            {
                "history_id": i + 1,
                "history_created_at": created.isoformat(),
                "history_modified_at": modified.isoformat() if modified else None,
                "history_number": _sample_number(rng, length),
                "history_game_id": game_id,
                "history_game_name": game_name,
                "history_type_id": bucket.type_id,
                "history_type_name": bucket.label,
                "history_amount": rng.choice([10, 20, 50, 100, 200, 500]),
                "history_user_id": user_id,
                "history_date": business_date.isoformat(),
                "history_group": group_id,
                "history_groupname": group_name,
            }
        )
    return records


def _write_json(path: Path, records: List[Dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(records, f, indent=2)


@app.command()
def main(
    rows: int = typer.Option(
        50,
        "--rows",
        "-r",
        help="Number of history records to generate.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    business_date: datetime = typer.Option(
        datetime.now().strftime("%Y-%m-%d"),
        "--date",
        "-d",
        formats=["%Y-%m-%d"],
        help="Business date stamped on every record.",
    ),
    output: Path = typer.Option(
        Path("sample_history.json"),
        "--output",
        "-o",
        help="JSON output path.",
    ),
) -> None:
    """
    Generate synthetic history records and write them as JSON.
    """
    start = time.perf_counter()
    records = _generate_records(rows, seed=seed, business_date=business_date.date())
    _write_json(output, records)
    typer.echo(
        f"Wrote {len(records):,} records -> {output} "
        f"(seed={seed}) in {time.perf_counter() - start:.2f}s"
    )


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
