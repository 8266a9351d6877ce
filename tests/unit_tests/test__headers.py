from file_vault.utils.headers import content_disposition


def test_ascii_filename_is_quoted():
    assert content_disposition("a.txt") == 'attachment; filename="a.txt"'


def test_quotes_in_filename_are_escaped():
    assert content_disposition('my "best" file.txt') == 'attachment; filename="my \\"best\\" file.txt"'


def test_non_ascii_filename_gets_utf8_variant():
    value = content_disposition("résumé.pdf")

    assert value == "attachment; filename=\"r?sum?.pdf\"; filename*=utf-8''r%C3%A9sum%C3%A9.pdf"
    value.encode("latin-1")


def test_control_characters_never_reach_the_header():
    value = content_disposition("evil\r\nX-Injected: 1")

    assert "\r" not in value
    assert "\n" not in value
