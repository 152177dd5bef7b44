"""c1fem.fem.reference.monomials
Bicubic monomial terms ``coeff * x**px * y**py`` as plain records.
"""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Term:
    px: int
    py: int
    coeff: int = 1

    def __call__(self, x, y):
        # works for python/numpy/mpmath scalars and for numpy arrays (incl. object)
        if self.coeff == 0:
            return 0 * x * y
        return self.coeff * x ** self.px * y ** self.py

    def diff(self, axis: str) -> "Term":
        if axis == "x":
            return Term(self.px - 1, self.py, self.coeff * self.px) if self.px else ZERO
        if axis == "y":
            return Term(self.px, self.py - 1, self.coeff * self.py) if self.py else ZERO
        raise ValueError(f"axis must be 'x' or 'y', got {axis!r}")

    def partial(self, order_x: int, order_y: int) -> "Term":
        term = self
        for _ in range(order_x):
            term = term.diff("x")
        for _ in range(order_y):
            term = term.diff("y")
        return term

    @property
    def degree(self) -> int:
        return self.px + self.py if self.coeff else 0


ZERO = Term(0, 0, 0)

# Fixed monomial order; the material-field coefficient vectors use it too,
# so the constant term is always the last one.
TERMS: Tuple[Term, ...] = (
    Term(3, 3), Term(3, 2), Term(2, 3), Term(2, 2),
    Term(3, 1), Term(1, 3), Term(2, 1), Term(1, 2),
    Term(3, 0), Term(0, 3), Term(1, 1), Term(2, 0),
    Term(0, 2), Term(1, 0), Term(0, 1), Term(0, 0),
)
CONSTANT_TERM = TERMS.index(Term(0, 0))

DX_TERMS = tuple(t.diff("x") for t in TERMS)
DY_TERMS = tuple(t.diff("y") for t in TERMS)
