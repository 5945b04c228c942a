"""Text and HTML rendering of matrices.

Pure read-only projections of ``Matrix.rows()``.
"""

from typing import Any, List

__all__ = ['pretty', 'html', 'summary']


def pretty(mat: Any) -> str:
    """Tab-separated rows, one line each."""
    res = ""
    for row in mat.rows():
        res += "\t".join(str(x) for x in row)
        res += "\n"
    return res


def html(mat: Any) -> str:
    """HTML table with an ``idx`` column holding the row index."""
    parts: List[str] = ["<table>\n", "<thead><tr><th>idx</th>"]
    for i in range(mat.n_cols):
        parts.append(f"<th>{i}</th>")
    parts.append("</tr></thead>")
    for j, row in enumerate(mat.rows()):
        parts.append(f"<tr><td><strong>{j}</strong></td>")
        for x in row:
            parts.append(f"<td>{x}</td>")
        parts.append("</tr>")
    parts.append("</table>")
    return "".join(parts)


def summary(mat: Any, max_rows: int) -> str:
    """Header line plus at most ``max_rows`` rows (head and tail)."""
    n_rows, n_cols = mat.shape
    header = f"Matrix(shape=({n_rows}, {n_cols}), dtype={mat.dtype})"
    if n_rows == 0:
        return header

    if n_rows <= max_rows:
        body = pretty(mat).rstrip("\n")
    else:
        head = max(max_rows // 2, 1)
        tail = max(max_rows - head, 0)
        lines = ["\t".join(str(x) for x in mat.row(i)) for i in range(head)]
        lines.append("...")
        lines.extend(
            "\t".join(str(x) for x in mat.row(i)) for i in range(n_rows - tail, n_rows)
        )
        body = "\n".join(lines)
    return f"{header}\n{body}"
