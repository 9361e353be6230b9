import random

from typeracer.categories import DEFAULT_TEXT, Categories


def make_texts(root, layout):
    for category, files in layout.items():
        (root / category).mkdir(parents=True)
        for name, content in files.items():
            (root / category / name).write_text(content, encoding="utf-8")


def test_get_categories(tmp_path):
    make_texts(tmp_path, {"cat2": {}, "cat1": {}})
    (tmp_path / "stray.txt").write_text("not a category", encoding="utf-8")
    assert Categories(tmp_path).get_categories() == ["cat1", "cat2"]


def test_get_categories_missing_dir(tmp_path):
    assert Categories(tmp_path / "missing").get_categories() == []


def test_get_text(tmp_path):
    make_texts(tmp_path, {"cat1": {}, "cat2": {"test": "TestContent"}})
    assert Categories(tmp_path).get_text("cat2") == "TestContent"


def test_get_text_picks_one_of_the_files(tmp_path):
    make_texts(tmp_path, {"Basic": {"a": "first", "b": "second", "c": "third"}})
    categories = Categories(tmp_path, rng=random.Random(7))
    seen = {categories.get_text("Basic") for _ in range(30)}
    assert seen <= {"first", "second", "third"}
    assert len(seen) > 1


def test_falls_back_to_default_text(tmp_path):
    make_texts(tmp_path, {"empty": {}, "blank": {"t": ""}})
    categories = Categories(tmp_path)
    assert categories.get_text("empty") == DEFAULT_TEXT
    assert categories.get_text("blank") == DEFAULT_TEXT
    assert categories.get_text("missing") == DEFAULT_TEXT
    assert Categories(tmp_path / "nowhere").get_text("Basic") == DEFAULT_TEXT


def test_undecodable_text_falls_back(tmp_path):
    (tmp_path / "bin").mkdir()
    (tmp_path / "bin" / "blob").write_bytes(b"\xff\xfe\x00bad")
    assert Categories(tmp_path).get_text("bin") == DEFAULT_TEXT
