import pytest

from chasm.domain.sanitize import build_logical_path, sanitize_filename, sanitize_postfolder


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("img.png", "img.png"),
        ("../../etc/passwd", "passwd"),
        ("..\\..\\windows\\win.ini", "win.ini"),
        ("/abs/path/photo.jpg", "photo.jpg"),
        ('what?<is>"this".png', "whatisthis.png"),
        ("tab\there.png", "tabhere.png"),
        ("trailing. ", "trailing"),
        ("CON", "_CON"),
        ("lpt1.txt", "_lpt1.txt"),
        (".hidden", ".hidden"),
        ("..", ""),
        (".", ""),
        ("", ""),
        ("dir/", ""),
    ],
)
def test_sanitize_filename(name, expected):
    assert sanitize_filename(name) == expected


def test_sanitize_filename_truncates_to_255_bytes():
    name = "é" * 200 + ".png"
    safe = sanitize_filename(name)
    assert len(safe.encode("utf-8")) <= 255
    assert safe.startswith("é")


@pytest.mark.parametrize(
    ("folder", "expected"),
    [
        ("my-post", "my-post"),
        ("2024/my-post", "2024/my-post"),
        ("../../etc", "etc"),
        ("/absolute/post", "absolute/post"),
        ("a/./b/../c", "a/b/c"),
        ("a\\b", "a/b"),
        ("..", ""),
        ("", ""),
    ],
)
def test_sanitize_postfolder(folder, expected):
    assert sanitize_postfolder(folder) == expected


def test_build_logical_path():
    assert build_logical_path("content", "p1", "index.md") == "content/p1/index.md"
    assert build_logical_path("/content/", "a/b", "x.png") == "content/a/b/x.png"
    assert build_logical_path("", "p1", "index.md") == "p1/index.md"
