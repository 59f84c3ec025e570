from evc.scanner import TagKind, scan_next


def test_no_tag():
    assert scan_next("<div>plain</div>", 0) is None


def test_open_tag():
    token = scan_next('ab<Card title="x">', 0)
    assert token.kind is TagKind.OPEN
    assert token.name == "Card"
    assert token.raw_attributes == 'title="x"'
    assert (token.start, token.end) == (2, 18)
    assert token.text == '<Card title="x">'


def test_self_closing_tag():
    token = scan_next("<Button disabled />", 0)
    assert token.kind is TagKind.SELF_CLOSING
    assert token.raw_attributes == "disabled"


def test_close_tag():
    token = scan_next("text</Ui::Card>", 0)
    assert token.kind is TagKind.CLOSE
    assert token.name == "Ui::Card"
    assert token.start == 4


def test_close_tag_with_trailing_space_is_literal():
    assert scan_next("</Card >", 0) is None


def test_earliest_tag_wins():
    token = scan_next("</A><B>", 0)
    assert token.kind is TagKind.CLOSE
    token = scan_next("</A><B>", token.end)
    assert token.kind is TagKind.OPEN
    assert token.name == "B"


def test_scan_from_cursor():
    assert scan_next("<A/><B/>", 4).name == "B"


def test_name_must_end_at_boundary():
    token = scan_next("<Foo-bar> <Bar>", 0)
    assert token.name == "Bar"


def test_namespace_segments_must_be_uppercase():
    token = scan_next("<Ui::card/>", 0)
    assert token is None


def test_brace_expression_may_contain_greater_than():
    token = scan_next("<If cond={a > b && c >= d}>x", 0)
    assert token.raw_attributes == "cond={a > b && c >= d}"
    assert token.text.endswith("}>")


def test_unbalanced_brace_falls_back_to_first_greater_than():
    token = scan_next("<Card x={oops>text", 0)
    assert token.kind is TagKind.OPEN
    assert token.raw_attributes == "x={oops"


def test_apostrophe_in_bare_word_is_not_a_quote():
    token = scan_next("<Note don't>", 0)
    assert token.raw_attributes == "don't"


def test_unterminated_tag_is_literal():
    assert scan_next("<Card title", 0) is None
