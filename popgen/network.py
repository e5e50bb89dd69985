from dataclasses import dataclass
import warnings

import pandas as pd


@dataclass(frozen=True)
class Node:
    """
    Georeferenced point of the transport network.

    Coordinates are expected in a projected coordinate system in meters, the
    same one as the district boundaries.
    """
    id: object
    x: float
    y: float

    @property
    def coord(self):
        return (self.x, self.y)


def nodes_from_dataframe(df, id_col='id', x_col='x', y_col='y'):
    """
    Builds a network node mapping from a DataFrame with one row per node.

    Parameters
    ----------
    df : pandas.DataFrame
        Table of nodes.
    id_col : str, optional
        Column with the node identifiers. If None, the index is used.
    x_col, y_col : str, optional
        Columns with projected coordinates.

    Returns
    -------
    dict
        Node identifier -> Node, in row order.
    """
    cols = [x_col, y_col] + ([id_col] if id_col is not None else [])
    for col in cols:
        if col not in df.columns:
            raise ValueError(f"Column '{col}' not found in data.")
    ids = df.index if id_col is None else df[id_col]
    if pd.Index(ids).has_duplicates:
        raise ValueError("Node identifiers must be unique.")
    return {i: Node(i, float(x), float(y)) for i, x, y in zip(ids, df[x_col], df[y_col])}


def nodes_from_geodataframe(gdf, id_col=None):
    """
    Builds a network node mapping from a GeoDataFrame of points.

    The geometries are used as they are; reprojecting them is up to the caller.
    """
    if gdf.crs is not None and gdf.crs.is_geographic:
        warnings.warn(f"Network nodes are in geographic CRS {gdf.crs}; distances will not be in meters.")
    if not (gdf.geometry.geom_type == 'Point').all():
        raise ValueError("All node geometries must be Points.")
    df = pd.DataFrame({'x': gdf.geometry.x, 'y': gdf.geometry.y}, index=gdf.index)
    if id_col is not None:
        df[id_col] = gdf[id_col]
    return nodes_from_dataframe(df, id_col=id_col)
