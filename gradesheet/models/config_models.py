from __future__ import annotations

from dataclasses import dataclass, field

"""Parser configuration dataclass.

Keyword vocabularies and tunable thresholds used by the extraction strategies
and the fuzzy matcher. Defaults target Moroccan "Massar" grade sheets written
in Arabic; a YAML file (see gradesheet.config.loader) may override any field so
other locales can be plugged in without touching the parsing logic.

All collections are tuples so the config stays hashable (compiled pattern sets
are cached per config).
"""

__all__ = [
    "ParserConfig",
    "DEFAULT_CONFIG",
]


@dataclass(frozen=True)
class ParserConfig:
    """Root configuration object for the OCR grade-sheet parser."""
    # --- grid builder
    table_start_keywords: tuple[str, ...] = ("رقم", "اسم", "الفرض", "ر.ت")
    min_table_rows: int = 5  # fewer rows -> loose re-scan
    loose_scan_min_lines: int = 10  # loose re-scan only if more candidate lines than this
    loose_min_line_length: int = 2
    loose_max_line_length: int = 100
    # --- structure identifier
    header_keywords: tuple[str, ...] = ("رقم", "اسم", "التلميذ", "الفرض", "النقطة", "المادة", "الأنشطة")
    header_scan_rows: int = 5
    id_keywords: tuple[str, ...] = ("رقم", "ر.ت")
    name_keywords: tuple[str, ...] = ("اسم", "التلميذ")
    mark_keywords: tuple[str, ...] = ("فرض", "الفرض", "نقطة", "الأنشطة", "نشاط")
    mark_column_ratio: float = 0.30
    # --- pattern-based extractor
    section_header_phrases: tuple[str, ...] = ("اسم التلميذ", "ر.ت")
    section_header_pairs: tuple[tuple[str, str], ...] = (("رقم", "اسم"),)
    footer_keywords: tuple[str, ...] = ("توقيع", "الأستاذ", "المدير", "ملاحظة")
    metadata_keywords: tuple[str, ...] = ("تاريخ", "الموسم", "الدراسي", "المملكة", "وزارة")
    min_section_rows: int = 5
    # --- shared
    script_range: str = "\u0600-\u06FF"  # regex character-class body of the native script
    min_grade: float = 0.0
    max_grade: float = 20.0
    min_name_length: int = 3
    placeholder_name: str = "طالب {number}"
    # --- fuzzy matcher
    name_similarity_threshold: float = 0.70
    containment_score: float = 0.9
    allograph_map: tuple[tuple[str, str], ...] = (
        ("أ", "ا"),
        ("إ", "ا"),
        ("آ", "ا"),
        ("ة", "ه"),
        ("ى", "ي"),
    )
    # --- roster (spreadsheet side)
    roster_header_keywords: tuple[str, ...] = ("رقم التلميذ", "إسم التلميذ", "تاريخ", "الفرض")
    roster_header_scan_rows: int = 10
    roster_number_keywords: tuple[str, ...] = ("رقم التلميذ", "رقم", "ر.ت", "الرقم")
    roster_name_keywords: tuple[str, ...] = (
        "الاسم الكامل",
        "اسم التلميذ",
        "إسم التلميذ",
        "الاسم",
        "اسم",
        "التلميذ",
    )
    roster_mark_labels: dict[str, tuple[str, ...]] = field(
        default_factory=lambda: {
            "fard1": ("الفرض 1", "الفرض الأول", "فرض 1", "الفرض1"),
            "fard2": ("الفرض 2", "الفرض الثاني", "فرض 2", "الفرض2"),
            "fard3": ("الفرض 3", "الفرض الثالث", "فرض 3", "الفرض3"),
            "activities": ("الأنشطة", "النشاط", "أنشطة", "المراقبة المستمرة"),
        },
        hash=False,
    )
    roster_mark_ratio: float = 0.7
    massar_indicators: tuple[str, ...] = ("رقم التلميذ", "إسم التلميذ", "الفرض", "النقطة", "مسار", "القسم", "الدورة")
    massar_min_indicators: int = 2
    massar_min_rows: int = 5
    mark_display_names: dict[str, str] = field(
        default_factory=lambda: {
            "الفرض 1": "fard1",
            "الفرض الأول": "fard1",
            "الفرض 2": "fard2",
            "الفرض الثاني": "fard2",
            "الفرض 3": "fard3",
            "الفرض الثالث": "fard3",
            "الأنشطة": "activities",
            "النشاط": "activities",
        },
        hash=False,
    )


DEFAULT_CONFIG = ParserConfig()
