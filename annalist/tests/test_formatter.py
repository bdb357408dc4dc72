from annalist.core.formatter import Formatter


def test_issues_in_bracketed_list() -> None:
    assert Formatter.issues_in("Login [ISSUE-1,ISSUE-2]") == ("ISSUE-1", "ISSUE-2")
    assert Formatter.issues_in("x [D]") == ("D",)
    assert Formatter.issues_in("Checkout [SHOP-1, #7]") == ("SHOP-1", "#7")


def test_issues_in_free_text_keep_order() -> None:
    assert Formatter.issues_in("Fixes #12 then ABC-3 and #4") == ("#12", "ABC-3", "#4")


def test_issue_keys_inside_method_names() -> None:
    assert Formatter.issues_in("shouldLogin_JIRA-42") == ("JIRA-42",)
    assert Formatter.issues_in("test_checkout_SHOP-7_and_SHOP-8") == ("SHOP-7", "SHOP-8")


def test_words_and_parameter_ids_are_not_issues() -> None:
    assert Formatter.issues_in("test_login[chrome]") == ()
    assert Formatter.issues_in("shouldLoginWithValidUser") == ()
    assert Formatter.issues_in("covid-19 rules") == ()
    assert Formatter.issues_in("") == ()
    assert Formatter.issues_in(None) == ()


def test_add_links_without_tracker_only_escapes() -> None:
    assert str(Formatter().add_links("<b>#1</b>")) == "&lt;b&gt;#1&lt;/b&gt;"
    assert str(Formatter().add_links(None)) == ""


def test_add_links_with_tracker() -> None:
    formatter = Formatter("https://tracker.example.com/browse/{0}")
    html = str(formatter.add_links("Fix #12 & [ABC-1, ABC-2]"))
    assert '<a target="_blank" href="https://tracker.example.com/browse/12">#12</a>' in html
    assert '<a target="_blank" href="https://tracker.example.com/browse/ABC-1">ABC-1</a>' in html
    assert '<a target="_blank" href="https://tracker.example.com/browse/ABC-2">ABC-2</a>' in html
    assert "&amp;" in html
    assert html.startswith("Fix ")


def test_issue_url_accepts_positional_placeholder() -> None:
    assert Formatter("https://bugs/{}").issue_url("#5") == "https://bugs/5"
    assert Formatter().issue_url("#5") is None


def test_hash_prefixed_tracker_keys_keep_their_hash() -> None:
    assert Formatter.issues_in("covers #MYPROJ-123") == ("#MYPROJ-123",)
    assert Formatter.issues_in("Login [#SHOP-4, SHOP-5]") == ("#SHOP-4", "SHOP-5")
    assert Formatter("https://bugs/{0}").issue_url("#MYPROJ-123") == "https://bugs/MYPROJ-123"


def test_parameter_ids_glued_to_a_name_are_not_issue_lists() -> None:
    assert Formatter.issues_in("test_fetch[GET]") == ()
    assert Formatter.issues_in("test_fetch[GET-2]") == ("GET-2",)
    assert Formatter.issues_in("Fetch resource [GET]") == ("GET",)
