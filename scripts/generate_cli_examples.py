from __future__ import annotations

import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

EXAMPLES_ROOT = Path("examples/cli-options")
FULL_SET = ["320x240", "-2.2,1.2", "0.8,-1.2"]


@dataclass
class Example:
    name: str
    output: Path
    args: list[str]
    options: list[str] | None = None

    def full_args(self) -> list[str]:
        return [sys.executable, "mandel.py", str(self.output), *self.args, *(self.options or [])]


EXAMPLES: list[Example] = [
    Example(
        name="full-set",
        output=EXAMPLES_ROOT / "full-set" / "mandel.png",
        args=[*FULL_SET, "4"],
    ),
    Example(
        name="seahorse-valley",
        output=EXAMPLES_ROOT / "seahorse-valley" / "seahorse.png",
        args=["400x300", "-1.20,0.35", "-1,0.20", "8"],
    ),
    Example(
        name="single-thread",
        output=EXAMPLES_ROOT / "single-thread" / "mandel.png",
        args=[*FULL_SET, "1"],
    ),
    Example(
        name="more-threads-than-rows",
        output=EXAMPLES_ROOT / "more-threads-than-rows" / "strip.png",
        args=["320x6", "-2.2,0.05", "0.8,-0.05", "16"],
    ),
    Example(
        name="tensorflow-backend",
        output=EXAMPLES_ROOT / "tensorflow-backend" / "mandel.png",
        args=[*FULL_SET, "4"],
        options=["--backend", "tensorflow"],
    ),
    Example(
        name="format",
        output=EXAMPLES_ROOT / "format" / "mandel.img",
        args=[*FULL_SET, "4"],
        options=["--format", "jpg"],
    ),
    Example(
        name="verbose",
        output=EXAMPLES_ROOT / "verbose" / "diagnostic.png",
        args=[*FULL_SET, "3"],
        options=["--verbose"],
    ),
]


def _ensure_clean(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.exists():
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()


def _prepare(example: Example) -> None:
    _ensure_clean([example.output.parent])
    example.output.parent.mkdir(parents=True, exist_ok=True)


def _verify(example: Example) -> None:
    if not example.output.is_file():
        raise RuntimeError(f"Expected file {example.output} was not created")
    if example.output.stat().st_size == 0:
        raise RuntimeError(f"File {example.output} is empty")


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        _prepare(example)
        completed = subprocess.run(example.full_args(), check=False)
        if completed.returncode != 0:
            raise RuntimeError(f"Example {example.name} failed with {completed.returncode}")
        _verify(example)
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
