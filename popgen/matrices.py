from pathlib import Path
import numpy as np
import pandas as pd

from popgen.constants import DISTANCE_CSV, WORKER_CSV, SEPARATOR, DECIMAL, THOUSANDS
from popgen.constants import FRACTION_DIGITS, TOTAL_COLUMN, METER_TO_KILOMETER
from popgen.geometry import to_xy


def _sorted_districts(city):
    return sorted(city.districts, key=lambda d: d.name)


def distance_matrix(city):
    """
    Distances in kilometers between the centers of all districts.

    Parameters
    ----------
    city : City

    Returns
    -------
    pandas.DataFrame
        Symmetric matrix with district names, sorted alphabetically, as index and columns.
    """
    districts = _sorted_districts(city)
    names = [d.name for d in districts]
    centers = np.array([to_xy(d.center()) for d in districts], dtype=float).reshape(-1, 2)
    diff = centers[:, None, :] - centers[None, :, :]
    km = np.hypot(diff[..., 0], diff[..., 1]) * METER_TO_KILOMETER
    return pd.DataFrame(km, index=pd.Index(names), columns=pd.Index(names))


def worker_matrix(city, total_column=TOTAL_COLUMN):
    """
    Number of synthesized commuters per pair of home and work district.

    Rows are home districts and columns work districts, both sorted by name, with
    a trailing column holding the census inhabitants of the home district.
    """
    districts = _sorted_districts(city)
    names = [d.name for d in districts]
    counts = [[work.incoming_worker_counts.get(home.name, 0) for work in districts] for home in districts]
    df = pd.DataFrame(counts, index=pd.Index(names), columns=pd.Index(names), dtype=int)
    df[total_column] = [home.inhabitants for home in districts]
    return df


def format_decimal(value, decimal=DECIMAL, thousands=THOUSANDS, fraction_digits=FRACTION_DIGITS):
    """
    Formats a number with at most `fraction_digits` decimals, dropping trailing zeros.

    The defaults follow the German convention, e.g. 1234.5 -> '1.234,5'.
    """
    text = f"{value:,.{fraction_digits}f}"
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text.replace(',', '\0').replace('.', decimal).replace('\0', thousands or '')


def write_matrices(city,
                   output_dir,
                   sep=SEPARATOR,
                   decimal=DECIMAL,
                   thousands=THOUSANDS,
                   fraction_digits=FRACTION_DIGITS,
                   total_column=TOTAL_COLUMN,
                   distance_file=DISTANCE_CSV,
                   worker_file=WORKER_CSV):
    """
    Writes the distance and worker matrices of `city` as delimited text files.

    Parameters
    ----------
    city : City
        City whose population has been synthesized.
    output_dir : str or Path
        Existing directory to write to.
    sep : str, optional
        Field separator.
    decimal, thousands : str, optional
        Decimal and grouping separators of the distances.
    fraction_digits : int, optional
        Maximum number of decimals of the distances.
    total_column : str, optional
        Header of the inhabitant total column of the worker matrix.
    distance_file, worker_file : str, optional
        File names inside `output_dir`.

    Returns
    -------
    tuple of Path
        Paths of the distance and worker files.
    """
    if sep in (decimal, thousands):
        raise ValueError(f"Separator {sep!r} clashes with the number format.")
    output_dir = Path(output_dir)
    distance_path = output_dir / distance_file
    worker_path = output_dir / worker_file

    distances = distance_matrix(city)
    formatted = distances.apply(
        lambda col: col.map(lambda v: format_decimal(v, decimal, thousands, fraction_digits)))
    formatted.to_csv(distance_path, sep=sep)

    worker_matrix(city, total_column=total_column).to_csv(worker_path, sep=sep)
    return distance_path, worker_path
