from dataclasses import dataclass

import pandas as pd

from popgen.constants import KARLSRUHE_CENSUS, CENSUS_SCALE_FACTOR
from popgen.exceptions import DistrictNotFoundError


@dataclass(frozen=True)
class Census:
    """
    Inhabitant and workplace counts of a single district.

    Attributes
    ----------
    name : str
        District name, used to join the census with a district boundary.
    inhabitants : int
        Number of inhabitants that need a home in the district.
    workplaces : int
        Number of workplaces available in the district.
    """
    name: str
    inhabitants: int
    workplaces: int

    def __post_init__(self):
        if self.inhabitants < 0 or self.workplaces < 0:
            raise ValueError(f"Census counts must be non-negative, got {self}")


class CensusTable:
    """
    Lookup table from district name to :class:`Census`.

    Methods
    -------
    add
        Adds a census record, replacing any record with the same name.
    find_census
        Exact-match lookup by district name.
    from_records
        Builds a table from (name, inhabitants, workplaces) triples.
    from_dataframe
        Builds a table from a pandas DataFrame.
    karlsruhe
        Census of the 27 districts of Karlsruhe.
    """

    def __init__(self, censuses=None):
        self._censuses = {}
        for census in censuses or []:
            self.add(census)

    def add(self, census):
        self._censuses[census.name] = census

    def find_census(self, name):
        """
        Returns the census of the district called `name`.

        Raises
        ------
        DistrictNotFoundError
            If there is no census with exactly this name.
        """
        try:
            return self._censuses[name]
        except KeyError:
            raise DistrictNotFoundError(name) from None

    @property
    def inhabitants(self):
        return sum(c.inhabitants for c in self._censuses.values())

    @property
    def workplaces(self):
        return sum(c.workplaces for c in self._censuses.values())

    def __contains__(self, name):
        return name in self._censuses

    def __iter__(self):
        return iter(self._censuses.values())

    def __len__(self):
        return len(self._censuses)

    def __repr__(self):
        return f"CensusTable({len(self)} districts, {self.inhabitants} inhabitants, {self.workplaces} workplaces)"

    @classmethod
    def from_records(cls, records, scale_factor=1):
        """
        Creates a table from (name, inhabitants, workplaces) triples.

        Parameters
        ----------
        records : iterable of tuple
            Raw census counts.
        scale_factor : int, optional
            Raw counts are integer-divided by this factor, e.g. 50 for a 2% sample.
        """
        if scale_factor < 1:
            raise ValueError(f"scale_factor must be a positive integer, got {scale_factor}")
        return cls(Census(name, int(inhabitants) // scale_factor, int(workplaces) // scale_factor)
                   for name, inhabitants, workplaces in records)

    @classmethod
    def from_dataframe(cls, df, name_col='name', inhabitants_col='inhabitants',
                       workplaces_col='workplaces', scale_factor=1):
        """
        Creates a table from a DataFrame with one row per district.
        """
        for col in [name_col, inhabitants_col, workplaces_col]:
            if col not in df.columns:
                raise ValueError(f"Column '{col}' not found in data.")
        if df[name_col].duplicated().any():
            dupes = df.loc[df[name_col].duplicated(), name_col].tolist()
            raise ValueError(f"Duplicate district names in census data: {dupes}")
        counts = df[[inhabitants_col, workplaces_col]].apply(pd.to_numeric)
        return cls.from_records(zip(df[name_col], counts[inhabitants_col], counts[workplaces_col]),
                                scale_factor=scale_factor)

    @classmethod
    def karlsruhe(cls, scale_factor=CENSUS_SCALE_FACTOR):
        return cls.from_records(((name, inh, work) for name, (inh, work) in KARLSRUHE_CENSUS.items()),
                                scale_factor=scale_factor)

    def to_dataframe(self):
        return pd.DataFrame([(c.name, c.inhabitants, c.workplaces) for c in self],
                            columns=['name', 'inhabitants', 'workplaces'])
