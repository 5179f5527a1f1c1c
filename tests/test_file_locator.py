"""
File locator tests (tmp_path project trees).
"""
from shadcn_props.file_locator import TEMP_DIR_NAME, candidate_patterns, locate_component_files
from shadcn_props.naming import normalize_component_name

ACCORDION = normalize_component_name("accordion")


def _touch(path, text="export {}\n"):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_patterns_most_specific_first():
    patterns = candidate_patterns(ACCORDION)
    assert patterns[0] == "components/ui/accordion.tsx"
    assert "**/components/**/Accordion.tsx" in patterns
    assert patterns[-1] == "**/components/**/*Accordion*.tsx"
    assert len(patterns) == len(set(patterns))


def test_finds_component_in_ui_dir(tmp_path):
    target = _touch(tmp_path / "components" / "ui" / "accordion.tsx")
    assert locate_component_files(ACCORDION, tmp_path) == [target.resolve()]


def test_finds_nested_and_src_layouts(tmp_path):
    a = _touch(tmp_path / "src" / "components" / "ui" / "accordion.tsx")
    b = _touch(tmp_path / "components" / "ui" / "accordion" / "parts.tsx")
    found = locate_component_files(ACCORDION, tmp_path)
    assert set(found) == {a.resolve(), b.resolve()}
    assert len(found) == 2


def test_node_modules_skipped(tmp_path):
    _touch(tmp_path / "node_modules" / "pkg" / "components" / "accordion.tsx")
    assert locate_component_files(ACCORDION, tmp_path) == []


def test_temp_component_dir_takes_precedence(tmp_path):
    _touch(tmp_path / "components" / "ui" / "accordion.tsx")
    temp = _touch(tmp_path / TEMP_DIR_NAME / "accordion.tsx")
    found = locate_component_files(ACCORDION, tmp_path, temp_dir=tmp_path / TEMP_DIR_NAME)
    assert found == [temp.resolve()]


def test_missing_root_returns_empty(tmp_path):
    assert locate_component_files(ACCORDION, tmp_path / "nope") == []


def test_custom_component_dirs(tmp_path):
    target = _touch(tmp_path / "app" / "ui" / "accordion.tsx")
    assert locate_component_files(ACCORDION, tmp_path, component_dirs=["app/ui"]) == [target.resolve()]
