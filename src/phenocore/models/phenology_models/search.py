# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
"""Threshold searches over (time, site) series.

Searches return one row index per site column, -1 meaning that the
criterion was never met. :func:`to_doy` turns these into DOY labels.
"""

import numpy as np
import pandas as pd

from phenocore.config import CONFIG
from phenocore.utils import ensure_defined

NO_EVENT = 9999
"""Result value of a site for which the event is never triggered."""


def first_true(mask):
    """Index of the first True row in every column, -1 where there is none."""
    mask = np.asarray(mask, dtype=bool)
    if mask.shape[0] == 0:
        return np.full(mask.shape[1:], -1)
    rows = np.argmax(mask, axis=0)
    return np.where(mask.any(axis=0), rows, -1)


def cumulative_threshold(S, F_crit, below=False):
    """First row where the accumulated series reaches ``F_crit``.

    Also used on lagged induction indices, which need not be monotonic.
    With ``below=True`` the series is a deficit that has to drop to
    ``F_crit`` or lower.
    """
    S = ensure_defined(np.asarray(S), "accumulated series")
    if below:
        return first_true(S <= F_crit)
    return first_true(S >= F_crit)


def sign_change(residual):
    """First row where the residual becomes strictly positive."""
    residual = ensure_defined(np.asarray(residual), "residual series")
    return first_true(residual > 0)


def smoothed_threshold(index, F_crit, window: int = 21):
    """First row where the centred rolling mean of index reaches ``F_crit``.

    Rows too close to either end for a full window are padded as undefined
    and can never trigger.
    """
    index = ensure_defined(np.asarray(index, dtype=float), "index series")
    smoothed = pd.DataFrame(index).rolling(window, center=True).mean().to_numpy()
    return first_true(smoothed >= F_crit)


def window_sums(values, window: int):
    """Forward sums over ``window`` rows for every complete window.

    Row ``i`` of the result holds ``values[i] + ... + values[i + window - 1]``,
    added in that order.
    """
    values = np.asarray(values, dtype=float)
    n_starts = values.shape[0] - window + 1
    sums = np.zeros((max(n_starts, 0),) + values.shape[1:])
    if n_starts <= 0:
        return sums
    for offset in range(window):
        sums += values[offset : offset + n_starts]
    return sums


def first_window_exceedance(values, threshold, window: int = 8, block_rows=None):
    """First start row of a forward window whose sum reaches ``threshold``.

    Scans start rows block by block. Columns drop out as soon as they
    trigger and the scan ends once no column is left, so late rows are only
    summed for sites that did not trigger earlier. Only complete windows are
    considered: a series shorter than ``window`` never triggers.
    """
    values = np.asarray(values, dtype=float)
    if values.ndim == 1:
        values = values[:, np.newaxis]
    if block_rows is None:
        block_rows = CONFIG.search_block_rows

    n_rows, n_cols = values.shape
    first = np.full(n_cols, -1)
    n_starts = n_rows - window + 1
    pending = np.arange(n_cols)

    for start in range(0, max(n_starts, 0), block_rows):
        stop = min(start + block_rows, n_starts)
        block = values[start : stop + window - 1][:, pending]
        hit = window_sums(block, window) >= threshold

        triggered = hit.any(axis=0)
        first[pending[triggered]] = start + np.argmax(hit[:, triggered], axis=0)
        pending = pending[~triggered]
        if pending.size == 0:
            break

    return first


def pulse_gate(values, threshold, window: int = 8, block_rows=None):
    """0/1 mask that opens at the first window reaching ``threshold``.

    Once open the gate stays open for the rest of the series.
    """
    values = np.asarray(values, dtype=float)
    first = first_window_exceedance(values, threshold, window, block_rows)
    rows = np.arange(values.shape[0])[:, np.newaxis]
    return ((first >= 0) & (rows >= first)).astype(float)


def no_event(n_sites: int):
    """Result for parameters that cannot trigger the event at any site."""
    return np.full(n_sites, float(NO_EVENT))


def to_doy(rows, doy):
    """Translate row indices into DOY labels, -1 becomes ``NO_EVENT``."""
    rows = np.asarray(rows)
    doy = np.asarray(doy)
    if doy.size == 0:
        # an empty series never triggers
        return np.full(rows.shape, float(NO_EVENT))
    labels = doy[np.clip(rows, 0, None)].astype(float)
    return np.where(rows >= 0, labels, float(NO_EVENT))
