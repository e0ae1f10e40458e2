"""
Affine grid engine: Rotation ∘ SkewX ∘ SkewY + Translation on an integer lattice.

Order of operations (right-to-left on vectors):
    1) SkewY(ky)   S_y = [[1, 0], [ky, 1]]
    2) SkewX(kx)   S_x = [[1, kx], [0, 1]]
    3) Rotation(θ) R   = [[cosθ, -sinθ], [sinθ, cosθ]]
then the translation (tx, ty) is added.

All functions are pure. Non-finite inputs propagate as NaN/inf in the outputs.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, NamedTuple, Sequence, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)


class Point2D(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class Matrix2x2:
    """[[a, b], [c, d]]"""
    a: float
    b: float
    c: float
    d: float

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    @property
    def trace(self) -> float:
        return self.a + self.d

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.a, self.b, self.c, self.d)

    def as_array(self) -> np.ndarray:
        return np.array([[self.a, self.b],
                         [self.c, self.d]], dtype=float)


IDENTITY = Matrix2x2(1.0, 0.0, 0.0, 1.0)


@dataclass(frozen=True)
class ComplexEigen:
    """Conjugate pair real ± imag·i, imag >= 0."""
    real: float
    imag: float
    is_complex = True


@dataclass(frozen=True)
class RealEigen:
    lambda1: float
    lambda2: float
    v1: Point2D      # unit length (or NaN for non-finite input)
    v2: Point2D
    is_complex = False

    @property
    def lambdas(self) -> Tuple[float, float]:
        return (self.lambda1, self.lambda2)


EigenResult = Union[ComplexEigen, RealEigen]


@dataclass(frozen=True)
class DiagnosticResult:
    name: str
    passed: bool
    details: str = ""


# ---------- Matrix helpers ----------

def multiply_2x2(A: Matrix2x2, B: Matrix2x2) -> Matrix2x2:
    """Row-major product A·B."""
    return Matrix2x2(
        A.a * B.a + A.b * B.c, A.a * B.b + A.b * B.d,
        A.c * B.a + A.d * B.c, A.c * B.b + A.d * B.d,
    )


def multiply_matrix_vector(M: Matrix2x2, x: float, y: float) -> Point2D:
    return Point2D(M.a * x + M.b * y, M.c * x + M.d * y)


def deg_to_rad(deg: float) -> float:
    return deg * math.pi / 180


def skew_x_matrix(k: float) -> Matrix2x2:
    return Matrix2x2(1.0, k, 0.0, 1.0)


def skew_y_matrix(k: float) -> Matrix2x2:
    return Matrix2x2(1.0, 0.0, k, 1.0)


def rotation_matrix(theta: float) -> Matrix2x2:
    """
    2D rotation matrix for angle theta (radians).
    numpy trig so that inf/NaN angles give NaN entries instead of raising.
    """
    with np.errstate(invalid="ignore"):
        c, s = float(np.cos(theta)), float(np.sin(theta))
    return Matrix2x2(c, -s, s, c)


def compose_matrix(skew_x: float, skew_y: float, rotation_deg: float) -> Matrix2x2:
    """
    M = R · (Sx · Sy).  SkewY acts on the vector first, rotation last.
    The association is fixed; reordering changes what the sliders mean.
    """
    sxy = multiply_2x2(skew_x_matrix(skew_x), skew_y_matrix(skew_y))
    return multiply_2x2(rotation_matrix(deg_to_rad(rotation_deg)), sxy)


# ---------- Lattice ----------

def make_grid_points(extent: int) -> np.ndarray:
    """
    Integer lattice over [-extent, extent]^2, x-major then y.
    Returns shape ((2*extent+1)^2, 2).
    """
    extent = int(extent)
    if extent < 0:
        return np.empty((0, 2), dtype=float)
    rng = np.arange(-extent, extent + 1, dtype=float)
    xs, ys = np.meshgrid(rng, rng, indexing="ij")
    return np.column_stack([xs.ravel(), ys.ravel()])


def apply_transform(M: Matrix2x2,
                    translation: Sequence[float],
                    points) -> np.ndarray:
    """
    p' = M·p + t for every row of 'points'. Row order is preserved.
    Uses row-vector convention internally: P' = P M^T + t.
    """
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    t = np.asarray(translation, dtype=float).reshape(2)
    with np.errstate(invalid="ignore", over="ignore"):
        return pts @ M.as_array().T + t


# ---------- Eigen decomposition ----------

def _eigenvector(M: Matrix2x2, lam: float, use_b: bool) -> Point2D:
    if use_b:
        vx, vy = M.b, lam - M.a
    else:
        vx, vy = lam - M.d, M.c
    norm = math.hypot(vx, vy)
    if norm == 0:
        # Degenerate direction: returned vector is arbitrary, not a real eigenvector.
        logger.debug("zero-norm eigenvector for λ=%s of %s", lam, M)
        norm = 1.0
    return Point2D(vx / norm, vy / norm)


def eigen(M: Matrix2x2) -> EigenResult:
    """
    Closed-form eigen decomposition of the 2x2 matrix M.

    discriminant < 0  -> ComplexEigen(trace/2, sqrt(-disc)/2)
    otherwise         -> RealEigen with λ1 >= λ2 and unit eigenvectors.

    Eigenvectors use (b, λ-a) when |b| > |c|, else (λ-d, c). The switch
    between the two forms makes the direction field jump where |b| == |c|.
    """
    trace = M.a + M.d
    determinant = M.a * M.d - M.b * M.c
    discriminant = trace * trace - 4 * determinant

    if discriminant < 0:
        return ComplexEigen(real=trace / 2, imag=math.sqrt(-discriminant) / 2)

    with np.errstate(invalid="ignore"):
        root = float(np.sqrt(discriminant))
    lambda1 = (trace + root) / 2
    lambda2 = (trace - root) / 2

    use_b = abs(M.b) > abs(M.c)
    return RealEigen(
        lambda1=lambda1,
        lambda2=lambda2,
        v1=_eigenvector(M, lambda1, use_b),
        v2=_eigenvector(M, lambda2, use_b),
    )


# ---------- Presentation helpers ----------

def hue_for_point(x: float, y: float) -> float:
    """Angle from the +x axis in degrees, mapped to [0, 360). Origin -> 0."""
    if x == 0 and y == 0:
        return 0.0
    deg = math.degrees(math.atan2(y, x))   # [-180, 180]
    return (deg + 360) % 360


def nearly_equal(a: float, b: float, eps: float = 1e-6) -> bool:
    return abs(a - b) <= eps


def run_diagnostics() -> List[DiagnosticResult]:
    """Sanity checks shown in the page's diagnostics panel."""
    results: List[DiagnosticResult] = []

    B = Matrix2x2(2.0, 3.0, 5.0, 7.0)
    IB = multiply_2x2(IDENTITY, B)
    results.append(DiagnosticResult(
        "I·B = B",
        all(nearly_equal(p, q) for p, q in zip(IB.as_tuple(), B.as_tuple())),
    ))

    r90 = rotation_matrix(math.pi / 2)
    vx, vy = multiply_matrix_vector(r90, 1.0, 0.0)
    results.append(DiagnosticResult(
        "R(90°)·(1,0) → (0,1)", nearly_equal(vx, 0.0) and nearly_equal(vy, 1.0),
    ))

    for (x, y), expected in (((1, 0), 0.0), ((0, 1), 90.0),
                             ((-1, 0), 180.0), ((0, -1), 270.0)):
        results.append(DiagnosticResult(
            f"hue({x},{y}) ≈ {expected:.0f}°",
            abs(hue_for_point(x, y) - expected) < 1e-6,
        ))

    results.append(DiagnosticResult("eig(R90) is complex", eigen(r90).is_complex))

    eS = eigen(Matrix2x2(2.0, 0.0, 0.0, 3.0))
    if eS.is_complex:
        results.append(DiagnosticResult("eig(diag(2,3)) = {2,3}", False, "returned complex"))
    else:
        rounded = {round(lam, 3) for lam in eS.lambdas}
        results.append(DiagnosticResult("eig(diag(2,3)) = {2,3}", rounded == {2.0, 3.0}))

    failed = [r.name for r in results if not r.passed]
    if failed:
        logger.warning("diagnostics failed: %s", ", ".join(failed))
    return results
