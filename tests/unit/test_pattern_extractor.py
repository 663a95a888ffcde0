from __future__ import annotations

from gradesheet.extraction.pattern_extractor import (
    distribute_marks,
    extract_by_patterns,
    extract_student_info,
    find_student_section,
    harvest_marks,
)
from gradesheet.models.student_record import StudentMarks, StudentRecord


def test_section_between_header_and_footer():
    lines = ["المملكة المغربية", "رقم اسم التلميذ", "1 أحمد", "2 سعيد", "توقيع الأستاذ", "3 ليس"]
    assert find_student_section(lines) == ["رقم اسم التلميذ", "1 أحمد", "2 سعيد"]


def test_section_starts_at_first_numbered_line():
    assert find_student_section(["عنوان", "5 علي", "نهاية"]) == ["5 علي", "نهاية"]


def test_no_section():
    assert find_student_section(["عنوان", "نص"]) is None


def test_section_ends_on_two_blank_lines_after_enough_rows():
    lines = ["ر.ت", "1 أ", "2 ب", "3 ج", "4 د", "5 ه", "6 و", "", "", "7 ز"]
    assert find_student_section(lines) == lines[:7]


def test_early_blank_lines_do_not_end_section():
    lines = ["ر.ت", "1 أ", "", "", "2 ب"]
    assert find_student_section(lines) == lines


def test_student_info_line_patterns():
    section = [
        "رقم اسم التلميذ",
        "1 أحمد بناني 15.50",
        "2",
        "سعيد العلوي",
        "3",
        "14.00 12.00",
        "التلميذة مريم 4",
        "5 يوسف",
        "5 يوسف المهدي",
    ]
    assert extract_student_info(section) == {
        "1": "أحمد بناني",
        "2": "سعيد العلوي",
        "3": "طالب 3",
        "4": "التلميذة مريم",
        "5": "يوسف المهدي",
    }


def test_student_info_needs_a_name_after_the_id():
    assert extract_student_info(["3 14.50"]) == {}


def test_harvest_skips_metadata_and_off_scale_tokens():
    lines = ["وزارة التربية 12", "1 أحمد 15.50 12,00", "G123456789 25.00 7"]
    assert harvest_marks(lines) == [1.0, 15.5, 12.0, 7.0]


def test_distribute_in_ascending_id_order():
    info = {"2": "ب", "1": "أ", "10": "ج"}
    marks = [float(v) for v in range(1, 10)]

    records = distribute_marks(info, marks)

    assert [r.number for r in records] == [1, 2, 10]
    assert records[0].marks == StudentMarks(1.0, 2.0, 3.0)
    assert records[1].marks == StudentMarks(4.0, 5.0, 6.0)
    assert records[2].marks == StudentMarks(7.0, 8.0, 9.0)


def test_distribute_caps_at_four_and_drops_leftovers():
    records = distribute_marks({"1": "أ", "2": "ب"}, [float(v) for v in range(10)])
    assert records[0].marks == StudentMarks(0.0, 1.0, 2.0, 3.0)
    assert records[1].marks == StudentMarks(4.0, 5.0, 6.0, 7.0)


def test_distribute_with_fewer_marks_than_students():
    records = distribute_marks({"1": "أ", "2": "ب", "3": "ج"}, [12.0])
    assert len(records) == 3
    assert all(r.marks == StudentMarks() for r in records)


def test_extract_by_patterns_single_student():
    records = extract_by_patterns(["3 يوسف", "14.50 12.00 16.25 18.00"])

    # the leading "3" is harvested as a grade as well
    assert records == [
        StudentRecord(
            number=3,
            name="يوسف",
            marks=StudentMarks(fard1=3.0, fard2=14.5, fard3=12.0, activities=16.25),
        )
    ]


def test_extract_by_patterns_nothing_found():
    assert extract_by_patterns(["عنوان", "نص"]) == []
    assert extract_by_patterns(["12 15.50"]) == []
