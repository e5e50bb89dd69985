import pytest
import pandas as pd
import geopandas as gpd
from shapely.geometry import Point

from popgen.network import Node, nodes_from_dataframe, nodes_from_geodataframe
from popgen.plans import Person, build_commute_plan
from popgen.population import Population

HOME = Node('h', 10.0, 20.0)
WORK = Node('w', 30.0, 40.0)


def make_person(identifier, home_leave=7 * 3600, work_leave=16 * 3600):
    plan = build_commute_plan(HOME, WORK, home_leave, work_leave)
    return Person(identifier, plan, home_district='A', work_district='B')


def test_population_roster():
    population = Population()
    person = make_person('A_0')
    population.add_person(person)
    assert len(population) == 1
    assert 'A_0' in population
    assert population['A_0'] is person
    assert list(population) == [person]


def test_replacing_a_person_is_reported(capsys):
    population = Population()
    population.add_person(make_person('A_0'))
    population.add_person(make_person('A_0', home_leave=8 * 3600))
    assert "already exists" in capsys.readouterr().out
    assert population['A_0'].plan.activities[0].end_time == 8 * 3600
    population.add_person(make_person('A_0'), verbose=False)
    assert capsys.readouterr().out == ""


def test_to_dataframe():
    population = Population()
    population.add_person(make_person('A_0'))
    population.add_person(make_person('A_1', home_leave=20 * 3600, work_leave=30 * 3600))
    df = population.to_dataframe()

    assert len(df) == 6
    first = df[df['person_id'] == 'A_0']
    assert first['type'].tolist() == ['home', 'work', 'home']
    assert first['node_id'].tolist() == ['h', 'w', 'h']
    assert first['x'].tolist() == [10.0, 30.0, 10.0]
    assert first['mode'].tolist()[:2] == ['car', 'car']
    assert pd.isna(first['mode'].iloc[2])
    assert first['end_time'].iloc[:2].tolist() == [7 * 3600, 16 * 3600]
    assert pd.isna(first['end_time'].iloc[2])

    wrapped = df[df['person_id'] == 'A_1']
    assert wrapped['type'].tolist() == ['work', 'home', 'work']
    assert wrapped['end_time'].iloc[0] == 6 * 3600


def test_empty_population_dataframe():
    df = Population().to_dataframe()
    assert df.empty
    assert 'end_time' in df.columns


def test_nodes_from_dataframe():
    df = pd.DataFrame({'id': ['a', 'b'], 'x': [1, 2], 'y': [3.5, 4.5]})
    nodes = nodes_from_dataframe(df)
    assert nodes == {'a': Node('a', 1.0, 3.5), 'b': Node('b', 2.0, 4.5)}
    assert nodes['a'].coord == (1.0, 3.5)

    by_index = nodes_from_dataframe(df.set_index('id'), id_col=None)
    assert list(by_index) == ['a', 'b']

    with pytest.raises(ValueError, match="unique"):
        nodes_from_dataframe(pd.DataFrame({'id': [1, 1], 'x': [0, 0], 'y': [0, 0]}))
    with pytest.raises(ValueError, match="not found"):
        nodes_from_dataframe(df, x_col='lon')


def test_nodes_from_geodataframe():
    gdf = gpd.GeoDataFrame({'osm_id': [7, 8]}, geometry=[Point(1, 2), Point(3, 4)], crs='EPSG:32633')
    nodes = nodes_from_geodataframe(gdf, id_col='osm_id')
    assert nodes == {7: Node(7, 1.0, 2.0), 8: Node(8, 3.0, 4.0)}

    with pytest.warns(UserWarning, match="geographic"):
        nodes_from_geodataframe(gdf.set_crs('EPSG:4326', allow_override=True))
