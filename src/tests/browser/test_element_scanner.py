"""Tests for interactive element discovery."""

import pytest
from lxml import html as lxml_html

from src.browser.element_scanner import ElementScanner
from src.models.page_models import ElementKind


@pytest.fixture
def scanner():
    """Create an ElementScanner instance for testing."""
    return ElementScanner()


def scan(scanner, markup):
    return scanner.scan(lxml_html.document_fromstring(markup))


class TestSelection:
    """Tests for the candidate selection predicate."""

    def test_form_controls_in_document_order(self, scanner):
        """Test inputs, textareas, selects and buttons are found in order."""
        candidates = scan(
            scanner,
            """
            <html><body><form>
              <input type="text" id="user">
              <textarea name="bio"></textarea>
              <select name="country"><option>US</option></select>
              <button id="go">Go</button>
            </form></body></html>
            """,
        )

        assert [c.tag for c in candidates] == ["input", "textarea", "select", "button"]
        assert [c.scan_index for c in candidates] == [1, 2, 3, 4]

    def test_anchor_requires_href(self, scanner):
        """Test anchors without a navigation target are skipped."""
        candidates = scan(
            scanner,
            '<body><a name="top">Top</a><a href="/help">Help</a></body>',
        )

        assert len(candidates) == 1
        assert candidates[0].kind == ElementKind.ANCHOR
        assert candidates[0].text == "Help"

    def test_explicit_roles(self, scanner):
        """Test elements exposing interactive roles are included."""
        candidates = scan(
            scanner,
            """
            <body>
              <div role="button">Save</div>
              <span role="checkbox" aria-label="Agree"></span>
              <div role="tablist"><div role="tab">One</div></div>
              <div role="presentation">Decor</div>
            </body>
            """,
        )

        assert [c.kind for c in candidates] == [
            ElementKind.BUTTON,
            ElementKind.CHECKBOX,
            ElementKind.OTHER,
        ]
        assert candidates[1].label == "Agree"

    def test_hidden_inputs_skipped(self, scanner):
        """Test type=hidden inputs are not candidates."""
        candidates = scan(
            scanner,
            '<body><input type="hidden" name="csrf"><input name="q"></body>',
        )

        assert [c.name for c in candidates] == ["q"]

    def test_excluded_containers(self, scanner):
        """Test script, style, template and noscript contents are skipped."""
        candidates = scan(
            scanner,
            """
            <html><head><title>x</title></head><body>
              <noscript><a href="/nojs">No JS</a></noscript>
              <template><button>Tpl</button></template>
              <button id="real">Real</button>
            </body></html>
            """,
        )

        assert [c.id for c in candidates] == ["real"]

    def test_hidden_subtrees_skipped(self, scanner):
        """Test hidden, aria-hidden and display:none subtrees are pruned."""
        candidates = scan(
            scanner,
            """
            <body>
              <div hidden><input id="a"></div>
              <div aria-hidden="true"><input id="b"></div>
              <div style="color: red; display: none"><input id="c"></div>
              <input id="d" style="visibility:hidden">
              <input id="e">
            </body>
            """,
        )

        assert [c.id for c in candidates] == ["e"]

    def test_disabled_controls_skipped(self, scanner):
        """Test disabled controls and disabled fieldsets are excluded."""
        candidates = scan(
            scanner,
            """
            <body>
              <input id="off" disabled>
              <fieldset disabled><input id="inside"></fieldset>
              <fieldset><input id="on"></fieldset>
            </body>
            """,
        )

        assert [c.id for c in candidates] == ["on"]

    def test_scan_is_stable(self, scanner):
        """Test repeated scans produce identical candidates."""
        markup = '<body><input name="a"><div><a href="#">x</a></div></body>'

        first = scan(scanner, markup)
        second = scan(scanner, markup)

        assert [c.model_dump() for c in first] == [c.model_dump() for c in second]


class TestKinds:
    """Tests for element kind classification."""

    @pytest.mark.parametrize(
        "markup,kind",
        [
            ("<input>", ElementKind.TEXT_INPUT),
            ('<input type="email">', ElementKind.TEXT_INPUT),
            ('<input type="PASSWORD">', ElementKind.TEXT_INPUT),
            ('<input type="checkbox">', ElementKind.CHECKBOX),
            ('<input type="radio">', ElementKind.RADIO),
            ('<input type="submit">', ElementKind.SUBMIT),
            ('<input type="reset">', ElementKind.BUTTON),
            ('<input type="range">', ElementKind.OTHER),
            ("<button>x</button>", ElementKind.SUBMIT),
            ('<button type="button">x</button>', ElementKind.BUTTON),
            ("<textarea></textarea>", ElementKind.TEXTAREA),
            ("<select></select>", ElementKind.SELECT),
            ('<a href="/">x</a>', ElementKind.ANCHOR),
            ('<div role="textbox"></div>', ElementKind.TEXT_INPUT),
        ],
    )
    def test_kind(self, scanner, markup, kind):
        """Test each control maps to its element kind."""
        candidates = scan(scanner, f"<body>{markup}</body>")
        assert len(candidates) == 1
        assert candidates[0].kind == kind


class TestExtraction:
    """Tests for candidate attribute extraction."""

    def test_attributes_and_paths(self, scanner):
        """Test attributes, ancestor path and node path are captured."""
        candidates = scan(
            scanner,
            """
            <html><body><div><form>
              <input type="Text" id="email" name="mail" placeholder="Email">
            </form></div></body></html>
            """,
        )
        candidate = candidates[0]

        assert candidate.type == "text"
        assert candidate.id == "email"
        assert candidate.name == "mail"
        assert candidate.placeholder == "Email"
        assert candidate.ancestor_path == ["html", "body", "div", "form"]
        assert candidate.node_path == "/html/body/div/form/input"
        assert candidate.attributes["placeholder"] == "Email"

    def test_button_text_is_collapsed(self, scanner):
        """Test visible text is trimmed and whitespace-collapsed."""
        candidates = scan(
            scanner,
            "<body><button>\n   Sign\n\t <b>in</b>  </button></body>",
        )
        assert candidates[0].text == "Sign in"

    def test_submit_input_text_from_value(self, scanner):
        """Test button-like inputs read their text from value."""
        candidates = scan(scanner, '<body><input type="submit" value="Log in"></body>')
        assert candidates[0].text == "Log in"

    def test_value_controls_have_no_text(self, scanner):
        """Test select option text is not used as the control text."""
        candidates = scan(
            scanner,
            "<body><select><option>Red</option><option>Blue</option></select></body>",
        )
        assert candidates[0].text is None

    def test_label_for_and_enclosing_label(self, scanner):
        """Test labels are resolved from for= and from enclosing labels."""
        candidates = scan(
            scanner,
            """
            <body>
              <label for="city">Home city</label><input id="city">
              <label>Zip code <input name="zip"></label>
            </body>
            """,
        )

        assert candidates[0].label == "Home city"
        assert candidates[1].label == "Zip code"

    def test_text_skips_hidden_and_unrendered_descendants(self, scanner):
        """Test hidden, script and style descendants do not contribute text."""
        candidates = scan(
            scanner,
            """
            <body>
              <a href="/x"><style>.a{}</style>Home</a>
              <button><span hidden>secret</span>Go</button>
              <button>Save <span aria-hidden="true">icon</span>draft<script>x()</script></button>
              <button><b style="display:none">old</b><!-- note -->Next <i>step</i></button>
            </body>
            """,
        )

        assert [c.text for c in candidates] == ["Home", "Go", "Save draft", "Next step"]

    def test_label_text_skips_hidden_descendants(self, scanner):
        candidates = scan(
            scanner,
            """
            <body>
              <label for="city">City <span hidden>(required)</span></label><input id="city">
              <label>Zip <span style="visibility: hidden">*</span><input name="zip"></label>
            </body>
            """,
        )

        assert candidates[0].label == "City"
        assert candidates[1].label == "Zip"
