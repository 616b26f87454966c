"""Unit tests for bill text cleaning."""

from src.ingestion.cleaner import clean_bill_html


class TestCleanBillHtml:
    def test_plain_text_whitespace_normalized(self):
        assert clean_bill_html("  SECTION 1.   SHORT   TITLE.\n\n\n\nText  ") == (
            "SECTION 1. SHORT TITLE.\n\nText"
        )

    def test_prefers_pre_block(self):
        html = "<html><body><nav>Menu</nav><p>Page chrome</p><pre>SEC. 2. FINDINGS.</pre></body></html>"
        assert clean_bill_html(html) == "SEC. 2. FINDINGS."

    def test_falls_back_to_body(self):
        html = "<html><head><title>Bill</title></head><body><p>Be it enacted</p></body></html>"
        assert clean_bill_html(html) == "Be it enacted"

    def test_removes_scripts_and_styles(self):
        html = "<body><script>var x = 1;</script><style>p {}</style><p>Text</p></body>"
        assert clean_bill_html(html) == "Text"

    def test_strips_print_markers(self):
        html = (
            "<pre>[Congressional Bills 118th Congress]\n"
            "[From the U.S. Government Printing Office]\n"
            "A BILL\n"
            "&lt;all&gt;\n</pre>"
        )
        assert clean_bill_html(html) == "A BILL"

    def test_keeps_paragraph_breaks(self):
        html = "<pre>SECTION 1. TITLE.\n\n\n\nSECTION 2. FINDINGS.</pre>"
        assert clean_bill_html(html) == "SECTION 1. TITLE.\n\nSECTION 2. FINDINGS."

    def test_empty_input(self):
        assert clean_bill_html("") == ""
