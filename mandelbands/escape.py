"""Escape-time test for points of the Mandelbrot set."""

from __future__ import annotations

from typing import Optional

import numpy as np
import tensorflow as tf

ESCAPE_LIMIT = 255
HORIZON = 4.0


def escape_time(c: complex, limit: int) -> Optional[int]:
    """Try to decide whether ``c`` belongs to the Mandelbrot set.

    Iterate ``z = z * z + c`` from zero at most ``limit`` times. Return the
    0-based iteration at which ``|z|**2`` first exceeded 4, or ``None`` when the
    limit was reached without escaping; the latter only means ``c`` *seems* to
    be a member.
    """

    z = 0j
    for i in range(limit):
        z = z * z + c
        if z.real * z.real + z.imag * z.imag > HORIZON:
            return i
    return None


@tf.function
def _escape_step(
    i: tf.Tensor,
    zr: tf.Tensor,
    zi: tf.Tensor,
    cr: tf.Tensor,
    ci: tf.Tensor,
    counts: tf.Tensor,
    active: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Advance every point that has not escaped yet by one iteration."""

    # Same operation order as complex multiplication on Python floats.
    zr_new = (zr * zr - zi * zi) + cr
    zi_new = (zr * zi + zi * zr) + ci
    zr = tf.where(active, zr_new, zr)
    zi = tf.where(active, zi_new, zi)
    norm = zr * zr + zi * zi
    escaped = tf.logical_and(active, norm > tf.constant(HORIZON, dtype=norm.dtype))
    counts = tf.where(escaped, tf.fill(tf.shape(counts), i), counts)
    active = tf.logical_and(active, tf.logical_not(escaped))
    return zr, zi, counts, active


@tf.function
def _escape_run(cr: tf.Tensor, ci: tf.Tensor, limit: tf.Tensor) -> tf.Tensor:
    """Iterate all points with a TensorFlow while loop and return escape counts."""

    limit = tf.cast(limit, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    zr = tf.zeros_like(cr)
    zi = tf.zeros_like(ci)
    counts = tf.fill(tf.shape(cr), tf.constant(-1, dtype=tf.int32))
    active = tf.ones_like(counts, tf.bool)

    def cond(i, zr, zi, counts, active):
        return tf.logical_and(tf.less(i, limit), tf.reduce_any(active))

    def body(i, zr, zi, counts, active):
        zr, zi, counts, active = _escape_step(i, zr, zi, cr, ci, counts, active)
        return i + 1, zr, zi, counts, active

    _, _, _, counts, _ = tf.while_loop(cond, body, (i, zr, zi, counts, active))
    return counts


def escape_counts(points: np.ndarray, limit: int) -> np.ndarray:
    """Vectorised :func:`escape_time` over an array of points.

    Returns an ``int32`` array shaped like ``points`` holding the escape
    iteration of each point, or ``-1`` where ``escape_time`` would return
    ``None``.
    """

    points = np.asarray(points, dtype=np.complex128)
    if points.size == 0:
        return np.full(points.shape, -1, dtype=np.int32)

    with tf.device("/CPU:0"):
        cr = tf.convert_to_tensor(np.ascontiguousarray(points.real), dtype=tf.float64)
        ci = tf.convert_to_tensor(np.ascontiguousarray(points.imag), dtype=tf.float64)
        counts = _escape_run(cr, ci, tf.constant(limit, dtype=tf.int32))
    return counts.numpy()
