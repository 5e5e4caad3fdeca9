import pytest

from utils.images import from_data_url, to_data_url


def test_data_url_encoding():
    url = to_data_url(b"abc", "shot.png")
    assert url == "data:image/png;base64,YWJj"
    assert from_data_url(url) == ("image/png", b"abc")


def test_explicit_mime_and_unknown_extension():
    assert to_data_url(b"x", mime="image/heic").startswith("data:image/heic;base64,")
    assert to_data_url(b"x", "blob").startswith("data:application/octet-stream;base64,")


@pytest.mark.parametrize("bad", ["", "http://example.com/a.png", "data:image/png,abc", "data:image/png;base64,@@@"])
def test_from_data_url_rejects_bad_input(bad):
    with pytest.raises(ValueError):
        from_data_url(bad)
