from speedgraph.tokenizer import parse_csv_rows


def test_plain_rows_and_trailing_newline():
    assert parse_csv_rows("a,b\n1,2\n") == [["a", "b"], ["1", "2"]]


def test_crlf_counts_as_one_terminator():
    assert parse_csv_rows("a,b\r\n1,2\r\n3,4") == [["a", "b"], ["1", "2"], ["3", "4"]]


def test_bare_carriage_return_ends_row():
    assert parse_csv_rows("a\r1\r") == [["a"], ["1"]]


def test_last_row_without_terminator_is_kept():
    assert parse_csv_rows("a,b\n1,2") == [["a", "b"], ["1", "2"]]


def test_quoted_field_keeps_comma_quote_and_newline():
    expected = 'he said "hi", then\nleft'
    text = 'name,note\nX,"' + expected.replace('"', '""') + '"\n'
    rows = parse_csv_rows(text)
    assert rows == [["name", "note"], ["X", expected]]


def test_empty_quoted_field_is_empty_string():
    assert parse_csv_rows('a,"",c') == [["a", "", "c"]]


def test_blank_physical_lines_are_dropped():
    assert parse_csv_rows("a\n\n1\n   \n2\n\n") == [["a"], ["1"], ["2"]]


def test_row_of_blank_cells_is_not_a_blank_line():
    # Dropping rows whose cells are all blank is the record layer's job.
    assert parse_csv_rows("a,b,c\n,,\n") == [["a", "b", "c"], ["", "", ""]]


def test_unterminated_quote_consumes_rest_of_input():
    rows = parse_csv_rows('a,b\n1,"open\n2,3')
    assert rows == [["a", "b"], ["1", "open\n2,3"]]


def test_empty_text():
    assert parse_csv_rows("") == []
