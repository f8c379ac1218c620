from __future__ import annotations

import gzip
from collections.abc import Callable
from pathlib import Path

import pytest

Y2LOG = "\n".join(
    [
        "2022-08-25 14:28:44 <1> localhost.localdomain(12375) [libstorage] SystemCmd.cc(addLine):569 Adding Line 14...",
        "Done",
        "2022-08-25 14:28:44 <0> localhost.localdomain(12375) [libstorage] CmdParted.cc(parse):139 device:/dev/nvme0n1",
        "2022-08-25 14:30:02 <3> localhost.localdomain(4420) [Ruby] y2storage/storage_manager.rb(probe_performed):471 probing failed",
        "2022-08-25 14:31:10 <2> install(4420) [Ruby] modules/Stage.rb(Set):79 stage changed",
        "2022-08-25 15:00:00 <1> install(9) [YaPI] YaPI started",
    ]
) + "\n"


@pytest.fixture
def y2log_text() -> str:
    return Y2LOG


@pytest.fixture
def write_y2log() -> Callable[[Path], None]:
    def _write(path: Path) -> None:
        path.write_text(Y2LOG, encoding="utf-8")

    return _write


@pytest.fixture
def write_gz_y2log() -> Callable[[Path], None]:
    def _write(path: Path) -> None:
        with gzip.open(path, mode="wt", encoding="utf-8") as f:
            f.write(Y2LOG)

    return _write
