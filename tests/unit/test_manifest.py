import json

import pytest

from js_debug_build.exceptions import TaskError
from js_debug_build.manifest import (
    apply_nightly,
    deep_merge,
    fix_nightly_readme,
    read_json,
    write_json,
)


def test_deep_merge_merges_nested_objects():
    target = {"contributes": {"commands": [{"command": "a"}], "menus": {"x": 1}}, "name": "t"}
    source = {"contributes": {"commands": [{"command": "b"}], "menus": {"y": 2}}}

    merged = deep_merge(target, source)

    assert merged == {
        "contributes": {
            "commands": [{"command": "a"}, {"command": "b"}],
            "menus": {"x": 1, "y": 2},
        },
        "name": "t",
    }


def test_deep_merge_source_scalar_replaces_target():
    assert deep_merge({"a": {"b": 1}}, {"a": 2}) == {"a": 2}
    assert deep_merge({"a": 1}, {"a": {"b": 2}}) == {"a": {"b": 2}}


def test_deep_merge_does_not_mutate_inputs():
    target = {"list": [1], "obj": {"k": "v"}}
    source = {"list": [2], "obj": {"j": "w"}}

    merged = deep_merge(target, source)
    merged["list"].append(3)
    merged["obj"]["z"] = 0

    assert target == {"list": [1], "obj": {"k": "v"}}
    assert source == {"list": [2], "obj": {"j": "w"}}


def test_apply_nightly():
    manifest = {"displayName": "JavaScript Debugger", "version": "1.0.0"}

    nightly = apply_nightly(manifest, "2024.3.507")

    assert nightly == {
        "displayName": "JavaScript Debugger (Nightly)",
        "version": "2024.3.507",
        "preview": True,
    }
    assert manifest["version"] == "1.0.0"


def test_write_json_uses_two_space_indent_and_keeps_unicode(tmp_path):
    path = tmp_path / "nested" / "package.nls.json"

    write_json(path, {"greeting": "grüß"})

    text = path.read_text(encoding="utf-8")
    assert text == '{\n  "greeting": "grüß"\n}'
    assert read_json(path) == {"greeting": "grüß"}


def test_write_json_compact(tmp_path):
    path = tmp_path / "bundle.json"
    write_json(path, {"a": [1, 2]}, indent=None)
    assert path.read_text(encoding="utf-8") == '{"a":[1,2]}'
    assert json.loads(path.read_text(encoding="utf-8")) == {"a": [1, 2]}


def test_fix_nightly_readme(tmp_path):
    readme = tmp_path / "README.md"
    readme.write_text("# Debugger\n", encoding="utf-8")
    notice = tmp_path / "README.nightly.md"
    notice.write_text("> Nightly build", encoding="utf-8")

    fix_nightly_readme(readme, notice)

    assert readme.read_text(encoding="utf-8") == "> Nightly build\n# Debugger\n"


def test_read_json_reports_half_written_file(tmp_path):
    path = tmp_path / "package.json"
    path.write_text("{", encoding="utf-8")

    with pytest.raises(TaskError, match="Failed to read .*package.json"):
        read_json(path)


def test_read_json_reports_missing_file(tmp_path):
    with pytest.raises(TaskError, match="Failed to read"):
        read_json(tmp_path / "missing.json")


def test_fix_nightly_readme_requires_notice(tmp_path):
    readme = tmp_path / "README.md"
    readme.write_text("# Debugger\n", encoding="utf-8")

    with pytest.raises(TaskError, match="nightly README"):
        fix_nightly_readme(readme, tmp_path / "README.nightly.md")

    assert readme.read_text(encoding="utf-8") == "# Debugger\n"
