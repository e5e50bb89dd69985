from popgen.census import Census, CensusTable
from popgen.city import City
from popgen.district import District
from popgen.network import Node
from popgen.population import Population
from popgen.matrices import distance_matrix, worker_matrix, write_matrices

__version__ = '0.1.0'
