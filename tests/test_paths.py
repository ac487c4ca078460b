import pytest

from inventory import join_root, normalize_path, normalize_relative, relative_to_root


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024\\05\\img.jpg", "2024/05/img.jpg"),
        ("2024//05///img.jpg", "2024/05/img.jpg"),
        ("2024/./05/../05/img.jpg", "2024/05/img.jpg"),
        ("c:\\uploads\\a.png", "C:/uploads/a.png"),
        ("/var/www/uploads/", "/var/www/uploads"),
        ("", ""),
        (".", ""),
    ],
)
def test_normalize_path(raw: str, expected: str) -> None:
    assert normalize_path(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "2024\\05/img.jpg",
        "/2024//05/./img.jpg",
        "./a/b/../c.txt",
        "\\\\server\\share\\x",
        "d:/Media\\2023/clip.mp4",
    ],
)
def test_normalize_is_idempotent(raw: str) -> None:
    once = normalize_path(raw)
    assert normalize_path(once) == once
    relative = normalize_relative(raw)
    assert normalize_relative(relative) == relative


def test_normalize_relative_strips_leading_separators() -> None:
    assert normalize_relative("/2024/img.jpg") == "2024/img.jpg"
    assert normalize_relative("\\2024\\img.jpg") == "2024/img.jpg"
    assert normalize_relative("./2024/img.jpg") == "2024/img.jpg"


def test_relative_to_root() -> None:
    assert relative_to_root("/srv/uploads/2024/a.jpg", "/srv/uploads") == "2024/a.jpg"
    assert relative_to_root("/srv/uploads/2024/a.jpg", "/srv/uploads/") == "2024/a.jpg"
    assert relative_to_root("C:\\site\\uploads\\a.jpg", "c:/site/uploads") == "a.jpg"
    assert relative_to_root("/srv/uploads", "/srv/uploads") == ""


def test_relative_to_root_rejects_outside_paths() -> None:
    with pytest.raises(ValueError):
        relative_to_root("/srv/uploads-old/a.jpg", "/srv/uploads")


def test_join_root() -> None:
    assert join_root("/srv/uploads", "2024\\a.jpg") == "/srv/uploads/2024/a.jpg"
    assert join_root("/srv/uploads/", "/2024/a.jpg") == "/srv/uploads/2024/a.jpg"
    assert join_root("/srv/uploads", "") == "/srv/uploads"
    assert join_root("/", "a.jpg") == "/a.jpg"
