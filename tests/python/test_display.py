"""
Tests for text and HTML rendering.
"""

from densekit import config, DisplayConfig
from densekit.dense import Matrix


class TestPretty:
    """Test tab-separated rendering."""

    def test_pretty(self):
        mat = Matrix.from_rows([[1, 2], [3, 4]], dtype='i32')
        assert mat.pretty == "1\t2\n3\t4\n"

    def test_pretty_floats(self, square_f64):
        assert square_f64.pretty == "1.0\t2.0\n3.0\t4.0\n"

    def test_pretty_empty(self):
        assert Matrix.zeros('f64', (0, 3)).pretty == ""


class TestHtml:
    """Test HTML table rendering."""

    def test_html(self):
        mat = Matrix.from_rows([[1, 2], [3, 4]], dtype='u8')
        assert mat.html == (
            "<table>\n"
            "<thead><tr><th>idx</th><th>0</th><th>1</th></tr></thead>"
            "<tr><td><strong>0</strong></td><td>1</td><td>2</td></tr>"
            "<tr><td><strong>1</strong></td><td>3</td><td>4</td></tr>"
            "</table>"
        )

    def test_repr_html(self, square_f64):
        assert square_f64._repr_html_() == square_f64.html

    def test_html_no_rows(self):
        mat = Matrix.zeros('f64', (0, 1))
        assert mat.html == "<table>\n<thead><tr><th>idx</th><th>0</th></tr></thead></table>"


class TestRepr:
    """Test the truncated summary used by repr()."""

    def test_repr_small(self):
        mat = Matrix.from_rows([[1, 2], [3, 4]], dtype='i64')
        assert repr(mat) == "Matrix(shape=(2, 2), dtype=i64)\n1\t2\n3\t4"

    def test_repr_empty(self):
        assert repr(Matrix.zeros('f32', (0, 2))) == "Matrix(shape=(0, 2), dtype=f32)"

    def test_repr_truncates(self):
        mat = Matrix.from_rows([[i] for i in range(10)], dtype='u8')
        with config.local(display=DisplayConfig(max_rows=4)):
            lines = repr(mat).split("\n")
        assert lines == [
            "Matrix(shape=(10, 1), dtype=u8)",
            "0", "1", "...", "8", "9",
        ]

    def test_repr_default_limit(self):
        mat = Matrix.zeros('u8', (25, 1))
        lines = repr(mat).split("\n")
        assert len(lines) == 1 + 20 + 1
        assert lines[11] == "..."
