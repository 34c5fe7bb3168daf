"""Desktop window for transforming LaTeX into STACK-compatible LaTeX."""

from __future__ import annotations

import argparse
from collections.abc import Iterable, Sequence

from stacklatex.transform import transform_latex

_COLUMN_WEIGHTS = (0.05, 6, 0.5, 3, 0.5, 6, 0.05)
_SIDE_WEIGHTS = (0.05, 0.4, 0.4)
_MIDDLE_WEIGHTS = (0.5, 0.1, 0.03, 0.1, 0.5)


def weighted_spans(weights: Iterable[float], length: float) -> list[tuple[float, float]]:
    """Split ``length`` into consecutive (offset, size) spans proportional to ``weights``."""
    weights = list(weights)
    if not weights:
        return []
    total = sum(weights)
    if total <= 0:
        raise ValueError("weights must have a positive sum")
    spans = []
    offset = 0.0
    for weight in weights:
        size = length * (weight / total)
        spans.append((offset, size))
        offset += size
    return spans


def weighted_min_size(
    sizes: Iterable[tuple[float, float]], horizontal: bool
) -> tuple[float, float]:
    """Minimum (width, height) of children laid out in a row or a column."""
    sizes = list(sizes)
    widths = [width for width, _ in sizes]
    heights = [height for _, height in sizes]
    if horizontal:
        return sum(widths, 0), max([0, *heights])
    return max([0, *widths]), sum(heights, 0)


class _TextBox:
    """Multi-line text box showing a grey hint while it is empty."""

    def __init__(self, tk, parent, placeholder: str) -> None:
        self.widget = tk.Text(parent, wrap="word", undo=True)
        self._placeholder = placeholder
        self._showing = False
        self.widget.tag_configure("placeholder", foreground="grey")
        self.widget.bind("<FocusIn>", self._hide_placeholder)
        self.widget.bind("<FocusOut>", self._show_placeholder)
        self._show_placeholder()

    def _show_placeholder(self, _event=None) -> None:
        if not self.widget.get("1.0", "end-1c"):
            self.widget.insert("1.0", self._placeholder, "placeholder")
            self._showing = True

    def _hide_placeholder(self, _event=None) -> None:
        if self._showing:
            self.widget.delete("1.0", "end")
            self._showing = False

    @property
    def value(self) -> str:
        return "" if self._showing else self.widget.get("1.0", "end-1c")

    @value.setter
    def value(self, content: str) -> None:
        self._hide_placeholder()
        self.widget.delete("1.0", "end")
        self.widget.insert("1.0", content)
        if not content and self.widget.focus_get() is not self.widget:
            self._show_placeholder()


def _place_weighted(children: Sequence, weights: Sequence[float], horizontal: bool) -> None:
    for child, (offset, size) in zip(children, weighted_spans(weights, 1.0)):
        if child is None:
            continue
        if horizontal:
            child.place(relx=offset, rely=0, relwidth=size, relheight=1)
        else:
            child.place(relx=0, rely=offset, relwidth=1, relheight=size)


def run_desktop_app() -> None:
    """Open the transformation window and run until it is closed."""
    import tkinter as tk

    root = tk.Tk()
    root.title("Hello")
    root.geometry("1080x720")

    input_col = tk.Frame(root)
    middle_col = tk.Frame(root)
    output_col = tk.Frame(root)
    _place_weighted(
        [None, input_col, None, middle_col, None, output_col, None], _COLUMN_WEIGHTS, True
    )

    source = _TextBox(tk, input_col, "Enter LaTeX code here!")
    log_text = tk.StringVar(value="")
    log_label = tk.Label(input_col, textvariable=log_text, anchor="nw", justify="left")
    _place_weighted([None, source.widget, log_label], _SIDE_WEIGHTS, False)

    target = _TextBox(tk, output_col, "Output will appear here!")
    info_text = tk.StringVar(value="")
    info_label = tk.Label(output_col, textvariable=info_text, anchor="nw", justify="left")
    _place_weighted([None, target.widget, info_label], _SIDE_WEIGHTS, False)

    def on_transform() -> None:
        result = transform_latex(source.value)
        if result.success:
            target.value = result.transformed
            log_text.set(result.log)
            info_text.set(result.info)
        else:
            target.value = ""
            log_text.set(result.error_message)
            info_text.set("")

    def on_copy() -> None:
        root.clipboard_clear()
        root.clipboard_append(target.value)

    submit = tk.Button(
        middle_col, text="Transform to \nSTACK-compatible LaTeX", command=on_transform
    )
    copy_button = tk.Button(middle_col, text="Copy output to clipboard", command=on_copy)
    _place_weighted([None, submit, None, copy_button, None], _MIDDLE_WEIGHTS, False)

    root.mainloop()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the desktop application."""
    parser = argparse.ArgumentParser(
        prog="stacklatex",
        description="Transform LaTeX into STACK-compatible LaTeX in a desktop window.",
    )
    parser.parse_args(argv)
    run_desktop_app()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())