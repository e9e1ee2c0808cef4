#!/usr/bin/env python3
"""
Reduce a matrix to RREF and write the full derivation as a LaTeX document.

Usage:
    python3 rref_tex.py [--input matrix.txt] [--out rref.tex] [--author NAME]
                        [--date DATE] [--plot steps.png] [-v]

Without --input the classic 4x4 example is used.
"""

import argparse
import logging

from rreftools.elimination.gauss_jordan import Eliminator
from rreftools.elimination.steps import StepRecorder, TeeSink
from rreftools.io.matrix_text import load_matrix
from rreftools.matrix.dense import Matrix
from rreftools.render.latex import LatexDocument


DEFAULT_ROWS = [
    [2, -5, -3, 16],
    [5, -6, 6, -13],
    [-2, -3, 6, 10],
    [23, -19, -33, 27],
]


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--input", type=str, default=None, help="plain text matrix, one row per line")
    ap.add_argument("--out", type=str, default="rref.tex", help="LaTeX file to write")
    ap.add_argument("--author", type=str, default=None, help="document author")
    ap.add_argument("--date", type=str, default=None, help="document date (default: \\today)")
    ap.add_argument("--plot", type=str, default=None, help="also save a PNG grid of every step")
    ap.add_argument("-v", "--verbose", action="store_true", help="log every step")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    M = load_matrix(args.input) if args.input else Matrix.from_rows(DEFAULT_ROWS)

    doc = LatexDocument(author=args.author, date=args.date)
    recorder = StepRecorder()

    print(f"Writing to {args.out}...")
    result = Eliminator().reduce(M, TeeSink(doc, recorder))
    doc.write(args.out)
    print(f"Finished writing to {args.out}!")
    print(f"rank={result.rank}  pivot columns={[j + 1 for j in result.pivot_columns]}  steps={result.step_count}")

    if args.plot:
        from rreftools.viz.draw import draw_steps
        draw_steps(recorder.steps, save_path=args.plot)
        print(f"Saved step grid to {args.plot}")


if __name__ == "__main__":
    main()
