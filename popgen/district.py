import numpy as np

from popgen.constants import RETRY_FACTOR, DEFAULT_LEG_MODE
from popgen.distributions import HOME_WORK_DISTANCE_DISTRIBUTION
from popgen.exceptions import WorkplaceCapacityError
from popgen.geometry import Boundary, to_xy
from popgen.plans import Person, sample_commute_plan


class District:
    """
    Named region of the city with a polygonal border, the network nodes inside it
    and its remaining inhabitant and workplace capacity.

    Attributes
    ----------
    name : str
        Unique name of the district.
    census : Census
        Inhabitant and workplace counts.
    boundary : Boundary
        Border of the district.
    nodes : dict
        Nodes inside the border, keyed by node id in insertion order.
    working_inhabitants : int
        Inhabitants for whom a person has been synthesized so far.
    workers : int
        Persons synthesized so far that work in this district.
    incoming_worker_counts : dict
        Home district name -> number of persons from there working in this district.

    Methods
    -------
    add_boundary_point
        Extends the border by one point.
    add_node_if_inside
        Keeps a node if it lies inside the border.
    find_work_district
        Draws a work district for one inhabitant by distance rank.
    synthesize_one_person
        Creates one commuter living in this district.
    """

    def __init__(self, name, census, boundary=None):
        self.name = name
        self.census = census
        self.boundary = Boundary(boundary)
        self.nodes = {}
        self._node_list = None
        self.working_inhabitants = 0
        self.workers = 0
        self.incoming_worker_counts = {}

    def add_boundary_point(self, point):
        self.boundary.add_point(point)

    def is_inside(self, point):
        """
        Tests if `point` lies inside the border. Points on the border line are outside.
        """
        return self.boundary.contains(point)

    def add_node_if_inside(self, node):
        """
        Adds `node` to the district if it lies inside the border.

        Returns
        -------
        bool
            True if the node was added, False otherwise.
        """
        if not self.is_inside(node):
            return False
        self.nodes[node.id] = node
        self._node_list = None
        return True

    def random_node(self, rng):
        """Draws one of the district's nodes uniformly at random."""
        if not self.nodes:
            raise ValueError(f"District {self.name} contains no network nodes to place an activity at.")
        if self._node_list is None:
            self._node_list = list(self.nodes.values())
        return self._node_list[int(rng.integers(len(self._node_list)))]

    @property
    def inhabitants(self):
        return self.census.inhabitants

    @property
    def workplaces(self):
        return self.census.workplaces

    def has_unplaced_inhabitants(self):
        return self.working_inhabitants < self.census.inhabitants

    def has_free_workplace(self):
        return self.workers < self.census.workplaces

    def center(self):
        """Center of the bounding box of the border."""
        return self.boundary.center()

    def distance_to(self, other):
        """Euclidean distance between the centers of both districts."""
        x1, y1 = to_xy(self.center())
        x2, y2 = to_xy(other.center())
        return float(np.hypot(x2 - x1, y2 - y1))

    def rank_by_distance(self, districts):
        """
        Sorts `districts` by distance from this district, nearest first.
        Districts at equal distance keep their input order.
        """
        x0, y0 = to_xy(self.center())
        centers = np.array([to_xy(d.center()) for d in districts], dtype=float).reshape(-1, 2)
        distances = np.hypot(centers[:, 0] - x0, centers[:, 1] - y0)
        order = np.argsort(distances, kind='stable')
        return [districts[i] for i in order]

    def find_work_district(self, districts, rng, distance_distribution=HOME_WORK_DISTANCE_DISTRIBUTION,
                           retry_factor=RETRY_FACTOR):
        """
        Selects the work district of one inhabitant.

        All `districts` with network nodes, full ones included, are ranked by
        distance and a rank is drawn from `distance_distribution`. The table is only
        truncated when there are fewer districts than ranks. Ranks whose district
        has no free workplace are redrawn, at most ``len(ranked) * retry_factor``
        times. After that the nearest district with a free workplace is taken.

        Parameters
        ----------
        districts : list of District
            Every district of the city, in a fixed order.

        Raises
        ------
        WorkplaceCapacityError
            If no district has a free workplace.
        """
        ranked = self.rank_by_distance([d for d in districts if d.nodes])
        if not ranked:
            raise WorkplaceCapacityError(f"No workplace capacity available for an inhabitant of {self.name}.")
        ranks = distance_distribution.truncated(len(ranked))
        for _ in range(len(ranked) * retry_factor):
            district = ranked[ranks.sample(rng)]
            if district.has_free_workplace():
                return district
        for district in ranked:
            if district.has_free_workplace():
                return district
        raise WorkplaceCapacityError(f"No workplace capacity available for an inhabitant of {self.name}.")

    def _next_person_id(self):
        return f"{self.name}_{self.working_inhabitants}"

    def _register_worker_from(self, home_district):
        self.workers += 1
        self.incoming_worker_counts[home_district.name] = self.incoming_worker_counts.get(home_district.name, 0) + 1

    def synthesize_one_person(self, districts, population, rng,
                              distance_distribution=HOME_WORK_DISTANCE_DISTRIBUTION,
                              retry_factor=RETRY_FACTOR, mode=DEFAULT_LEG_MODE):
        """
        Creates one commuter living in this district and hands it to `population`.

        Parameters
        ----------
        districts : list of District
            Every district of the city. The person works in one with a free workplace.
        population : object
            Receiver of the person, anything with an `add_person(person)` method.
        rng : numpy.random.Generator
            Source of randomness for the work district, locations and timing.

        Returns
        -------
        Person or None
            The new person, or None if every inhabitant already has been placed.
        """
        if not self.has_unplaced_inhabitants():
            return None
        work_district = self.find_work_district(districts, rng,
                                                distance_distribution=distance_distribution,
                                                retry_factor=retry_factor)
        plan = sample_commute_plan(self.random_node(rng), work_district.random_node(rng), rng, mode=mode)
        person = Person(self._next_person_id(), plan, home_district=self.name, work_district=work_district.name)

        # counters only move once the population accepted the person
        population.add_person(person)
        self.working_inhabitants += 1
        work_district._register_worker_from(self)
        return person

    def __eq__(self, other):
        if not isinstance(other, District):
            return NotImplemented
        return self.name == other.name

    def __hash__(self):
        return hash(self.name)

    def __repr__(self):
        return f"District(name={self.name!r}, nodes={len(self.nodes)}, inhabitants={self.working_inhabitants}/{self.census.inhabitants}, workers={self.workers}/{self.census.workplaces})"
