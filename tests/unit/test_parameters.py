import os

import pytest

from lsh.UTILS.parameters import all_operating_systems, os_named, parameters


@pytest.fixture
def conf_root(tmp_path):
    for os_name, versions in {
        "Ubuntu": ["jammy-20230624", "focal-20230605"],
        "RedHat": ["ubi9-9.2-722"],
        "Alpine": [],
    }.items():
        for version in versions:
            (tmp_path / os_name / version).mkdir(parents=True)
            (tmp_path / os_name / version / "Dockerfile").write_text("FROM scratch\n")
        (tmp_path / os_name).mkdir(exist_ok=True)
    (tmp_path / "README").write_text("not an OS")
    (tmp_path / "Ubuntu" / "notes.txt").write_text("not a version")
    return tmp_path


def test_every_pair_once(conf_root):
    pairs = parameters(all_operating_systems, str(conf_root))
    assert sorted(pairs) == [
        ("RedHat", "ubi9-9.2-722"),
        ("Ubuntu", "focal-20230605"),
        ("Ubuntu", "jammy-20230624"),
    ]
    assert len(set(pairs)) == len(pairs)


def test_filter_receives_os_directory(conf_root):
    seen = []

    def record(os_dir):
        seen.append(os_dir)
        return False

    assert parameters(record, str(conf_root)) == []
    assert sorted(os.path.basename(p) for p in seen) == ["Alpine", "RedHat", "Ubuntu"]


def test_os_named_filter(conf_root):
    pairs = parameters(os_named("Ubuntu"), str(conf_root))
    assert sorted(pairs) == [("Ubuntu", "focal-20230605"), ("Ubuntu", "jammy-20230624")]


def test_missing_root(tmp_path):
    with pytest.raises(FileNotFoundError):
        parameters(all_operating_systems, str(tmp_path / "missing"))


def test_bundled_configuration():
    conf = os.path.join(os.path.dirname(__file__), "..", "resources", "conf")
    pairs = parameters(all_operating_systems, conf)
    assert ("Ubuntu", "jammy-20230624") in pairs
    assert ("RedHat", "ubi9-9.2-722") in pairs
