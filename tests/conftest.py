# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pytest

from gradesheet.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("GRADESHEET_CONFIG", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _fresh_logger():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """name_similarity_threshold: 0.8
mark_column_ratio: 0.5
footer_keywords: [توقيع, المدير]
section_header_pairs:
  - [رقم, اسم]
allograph_map:
  أ: ا
  ة: ه
roster_mark_labels:
  activities: [الأنشطة]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "parser.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def table_lines() -> list[str]:
    return [
        "رقم اسم التلميذ الفرض1 الفرض2",
        "1 أحمد 15.50 12.00",
        "2 سعيد 18.00 09.50",
    ]


@pytest.fixture()
def massar_ocr_text() -> str:
    # OCR as returned by the cloud service: title lines, header, rows
    return "\n".join(
        [
            "المملكة المغربية",
            "وزارة التربية الوطنية",
            "الموسم الدراسي ٢٠٢٣/٢٠٢٤",
            "رقم  |  اسم التلميذ  |  الفرض 1  |  الفرض 2",
            "١  |  أحمد بناني  |  ١٥.٥٠  |  ١٢.٠٠",
            "2  |  سعيد العلوي  |  18.00  |  09.50",
            "3  |  فاطمة الزهراء  |  14,25  |  16.00",
        ]
    )


@pytest.fixture()
def roster_rows() -> list[list[object]]:
    return [
        ["رقم التلميذ", "إسم التلميذ", "تاريخ الازدياد", "الفرض 1", "الفرض 2", "الفرض 3", "الأنشطة"],
        ["G000000001", "أحمد بناني", "2010-01-01", None, None, None, None],
        ["G000000002", "سعيد العلوي", "2010-02-01", None, None, None, None],
        ["G000000003", "فاطمة الزهراء", "2010-03-01", None, None, None, None],
        ["G000000004", "يوسف الإدريسي", "2010-04-01", None, None, None, None],
        ["G000000005", "محمّد أمين", "2010-05-01", None, None, None, None],
    ]
