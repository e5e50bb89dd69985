from shapely.geometry import Polygon, MultiPolygon
import numpy.random as npr
import warnings
import time

from popgen.constants import RETRY_FACTOR, DEFAULT_LEG_MODE
from popgen.distributions import HOME_WORK_DISTANCE_DISTRIBUTION
from popgen.district import District
from popgen.exceptions import CapacityError, WorkplaceCapacityError

# =============================================================================
# CITY CLASS
# =============================================================================


class City:
    """
    A city partitioned into districts, each joined with its census.

    The city assigns network nodes to the districts enclosing them and synthesizes
    one commuter per inhabitant, keeping two pools up to date while doing so: the
    districts that still have unplaced inhabitants and the districts that still
    have free workplaces.

    Attributes
    ----------
    census : CensusTable
        Inhabitant and workplace counts by district name.
    districts : list of District
        Districts in insertion order, which is also the node assignment order.
    districts_with_inhabitants : list of District
        Districts with inhabitants that have not been synthesized yet.
    districts_with_workplaces : list of District
        Districts with free workplaces and at least one node to work at.

    Methods
    -------
    add_district
        Joins a named boundary with the census and adds the district.
    from_geodataframe
        Builds a city from a GeoDataFrame of district polygons.
    assign_node
        Adds a node to the first district containing it.
    add_nodes
        Assigns all nodes of a network.
    check_capacity
        Verifies the city can employ all remaining inhabitants.
    synthesize_population
        Creates all inhabitants of the city.
    """

    def __init__(self, census, name="City"):
        self.name = name
        self.census = census
        self.districts = []
        self._by_name = {}
        self.districts_with_inhabitants = []
        self.districts_with_workplaces = []

    def add_district(self, name, boundary=None):
        """
        Adds a district called `name` with the given boundary points.

        Raises
        ------
        DistrictNotFoundError
            If the census has no district called `name`.
        ValueError
            If a district with this name already exists.
        """
        if name in self._by_name:
            raise ValueError(f"District {name} already exists in city {self.name}.")
        district = District(name, self.census.find_census(name), boundary)
        self.districts.append(district)
        self._by_name[name] = district
        if district.has_unplaced_inhabitants():
            self.districts_with_inhabitants.append(district)
        if district.has_free_workplace():
            self.districts_with_workplaces.append(district)
        return district

    def add_districts(self, boundaries):
        """
        Adds several districts.

        Parameters
        ----------
        boundaries : dict or iterable of tuple
            District name -> boundary points, or (name, points) pairs.
        """
        items = boundaries.items() if hasattr(boundaries, 'items') else boundaries
        return [self.add_district(name, points) for name, points in items]

    @classmethod
    def from_geodataframe(cls, gdf, census, name_col='name', to_crs=None, exclude=(), name="City"):
        """
        Creates a city from a GeoDataFrame with one polygon per district.

        Parameters
        ----------
        gdf : geopandas.GeoDataFrame
            District names and polygons.
        census : CensusTable
            Census to join the districts with, by exact name.
        name_col : str, optional
            Column holding the district names.
        to_crs : optional
            CRS the boundaries are projected to before use. Must match the CRS of
            the network nodes.
        exclude : iterable of str, optional
            Names of rows that are not districts, e.g. an enclosing county border.
        """
        if name_col not in gdf.columns:
            raise KeyError(f"gdf must contain column '{name_col}'.")
        if to_crs is not None:
            gdf = gdf.to_crs(to_crs)
        exclude = set(exclude)

        city = cls(census, name=name)
        for district_name, geom in zip(gdf[name_col], gdf.geometry):
            if district_name in exclude:
                continue
            if isinstance(geom, MultiPolygon):
                warnings.warn(f"District {district_name} has several parts; keeping the largest one.")
                geom = max(geom.geoms, key=lambda g: g.area)
            if not isinstance(geom, Polygon):
                warnings.warn(f"Skipping {district_name}: geometry is {getattr(geom, 'geom_type', None)}, not a Polygon.")
                continue
            city.add_district(district_name, list(geom.exterior.coords))
        return city

    def get_district(self, name):
        return self._by_name[name]

    def assign_node(self, node):
        """
        Adds `node` to the first district containing it.

        Returns
        -------
        District or None
            The district the node was added to, None if no district contains it.
        """
        for district in self.districts:
            if district.add_node_if_inside(node):
                return district
        return None

    def add_nodes(self, network, verbose=False):
        """
        Assigns every node of `network` to a district.

        Parameters
        ----------
        network : dict or iterable
            Node id -> node, or an iterable of nodes.

        Returns
        -------
        int
            Number of nodes outside every district.
        """
        _t0 = time.time()
        nodes = network.values() if hasattr(network, 'values') else network
        total, unassigned = 0, 0
        for node in nodes:
            total += 1
            if self.assign_node(node) is None:
                unassigned += 1

        if unassigned:
            warnings.warn(f"{unassigned:,} of {total:,} nodes lie outside every district of {self.name}.")
        empty = [d.name for d in self.districts if not d.nodes and (d.inhabitants or d.workplaces)]
        if empty:
            warnings.warn(f"Districts without network nodes: {empty}")
        if verbose:
            print(f"Assigned {total - unassigned:,} of {total:,} nodes to {len(self.districts)} districts (in {time.time()-_t0:.2f}s)")
        return unassigned

    def is_inside(self, node):
        """Tests if any district contains `node`."""
        return any(district.is_inside(node) for district in self.districts)

    def nodes(self):
        """Iterates over the nodes of all districts."""
        for district in self.districts:
            yield from district.nodes.values()

    def restrict(self, network):
        """
        Returns the part of `network` that lies inside the city.
        """
        return {node_id: node for node_id, node in network.items() if self.is_inside(node)}

    @property
    def inhabitants(self):
        return sum(d.inhabitants for d in self.districts)

    @property
    def workplaces(self):
        return sum(d.workplaces for d in self.districts)

    def _reset_pools(self):
        self.districts_with_inhabitants = [d for d in self.districts if d.has_unplaced_inhabitants()]
        self.districts_with_workplaces = [d for d in self.districts if d.has_free_workplace() and d.nodes]

    def clean_up_pools(self):
        """Drops districts that ran out of inhabitants or workplaces from the pools."""
        self.districts_with_inhabitants = [d for d in self.districts_with_inhabitants if d.has_unplaced_inhabitants()]
        self.districts_with_workplaces = [d for d in self.districts_with_workplaces if d.has_free_workplace()]

    def check_capacity(self):
        """
        Verifies that every remaining inhabitant can be given a home and a workplace.

        Workplaces in districts without network nodes cannot be used and are not
        counted.

        Raises
        ------
        ValueError
            If a district with unplaced inhabitants contains no network nodes.
        CapacityError
            If there are fewer usable free workplaces than unplaced inhabitants.
        """
        homeless = [d.name for d in self.districts if d.has_unplaced_inhabitants() and not d.nodes]
        if homeless:
            raise ValueError(f"Districts with inhabitants but without network nodes: {homeless}")

        unreachable = [d.name for d in self.districts if d.has_free_workplace() and not d.nodes]
        if unreachable:
            warnings.warn(f"Workplaces in districts without network nodes are not used: {unreachable}")

        demand = sum(d.inhabitants - d.working_inhabitants for d in self.districts)
        supply = sum(d.workplaces - d.workers for d in self.districts if d.nodes)
        if supply < demand:
            raise CapacityError(f"City {self.name} has {demand:,} inhabitants to place but only {supply:,} usable workplaces.")

    def synthesize_population(self, population, seed=0, rng=None, verbose=False,
                              distance_distribution=HOME_WORK_DISTANCE_DISTRIBUTION,
                              retry_factor=RETRY_FACTOR, mode=DEFAULT_LEG_MODE):
        """
        Creates one person for every inhabitant of the city.

        Home districts are drawn uniformly at random from the districts that still
        have unplaced inhabitants. The work district is drawn by distance rank among
        all districts of the city and redrawn while it has no free workplace, see
        :meth:`District.find_work_district`.

        Parameters
        ----------
        population : object
            Receiver of the persons, anything with an `add_person(person)` method.
        seed : int, optional
            Seed of the random generator, ignored if `rng` is given.
        rng : numpy.random.Generator, optional
            Random generator to draw from.
        verbose : bool, optional
            If True, prints progress.

        Returns
        -------
        int
            Number of persons created.
        """
        if rng is None:
            rng = npr.default_rng(seed)
        self.check_capacity()
        self._reset_pools()

        _t0 = time.time()
        created = 0
        while self.districts_with_inhabitants:
            pool = self.districts_with_inhabitants
            if not self.districts_with_workplaces:
                raise WorkplaceCapacityError(f"City {self.name} ran out of workplaces after {created:,} persons.")
            home = pool[int(rng.integers(len(pool)))]
            home.synthesize_one_person(self.districts, population, rng,
                                       distance_distribution=distance_distribution,
                                       retry_factor=retry_factor, mode=mode)
            created += 1
            self.clean_up_pools()
            if verbose and created % 10_000 == 0:
                print(f"  {created:,} persons created")

        if verbose:
            print(f"Created {created:,} persons in {len(self.districts)} districts (in {time.time()-_t0:.2f}s)")
        return created

    def __iter__(self):
        return iter(self.districts)

    def __len__(self):
        return len(self.districts)

    def __repr__(self):
        return f"City(name={self.name!r}, districts={len(self.districts)})"
