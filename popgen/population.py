import pandas as pd


class Population:
    """
    In-memory collection of synthesized persons.

    Any object with an `add_person(person)` method can take its place as the
    receiver of :meth:`popgen.city.City.synthesize_population`; this one keeps the
    persons around for inspection and tabular export.

    Attributes
    ----------
    roster : dict
        Persons keyed by their identifiers, in creation order.

    Methods
    -------
    add_person
        Adds a person to the population.
    to_dataframe
        One row per activity of every person.
    """

    def __init__(self):
        self.roster = {}

    def add_person(self, person, verbose=True):
        """
        Adds a person to the population.
        If the identifier already exists in the population, it will be replaced.
        """
        if verbose and person.identifier in self.roster:
            print(f"Person identifier {person.identifier} already exists in population. Replacing corresponding person.")
        self.roster[person.identifier] = person

    def __len__(self):
        return len(self.roster)

    def __iter__(self):
        return iter(self.roster.values())

    def __contains__(self, identifier):
        return identifier in self.roster

    def __getitem__(self, identifier):
        return self.roster[identifier]

    def to_dataframe(self):
        """
        Flattens all plans into a DataFrame.

        Returns
        -------
        pandas.DataFrame
            Columns ['person_id', 'home_district', 'work_district', 'activity_index',
            'type', 'node_id', 'x', 'y', 'end_time', 'mode'], where 'mode' is the mode
            of the leg leaving the activity.
        """
        rows = []
        for person in self.roster.values():
            legs = person.plan.legs
            for i, activity in enumerate(person.plan.activities):
                rows.append({
                    'person_id': person.identifier,
                    'home_district': person.home_district,
                    'work_district': person.work_district,
                    'activity_index': i,
                    'type': activity.type,
                    'node_id': activity.node.id,
                    'x': activity.x,
                    'y': activity.y,
                    'end_time': activity.end_time,
                    'mode': legs[i].mode if i < len(legs) else None,
                })
        df = pd.DataFrame(rows, columns=['person_id', 'home_district', 'work_district', 'activity_index',
                                         'type', 'node_id', 'x', 'y', 'end_time', 'mode'])
        df['end_time'] = df['end_time'].astype('Int64')
        return df
