import numpy as np

SEC_PER_UNIT = {'s': 1, 'min': 60, 'h': 3_600, 'd': 86_400}

# For activity timing
MINUTES_TO_WORK = 30
HOURS_OF_WORK = 8
MINUTES_OF_PAUSE = 30
MINUTES_IN_HOUR = 60

# Probability of leaving home in each hour of the day
HOME_LEAVE_HOURS = np.arange(24)
HOME_LEAVE_TIME_PROBABILITIES = [0.0, 0.005, 0.005, 0.005, 0.015, 0.075,
                                 0.235, 0.305, 0.12, 0.04, 0.03, 0.01,
                                 0.03, 0.05, 0.02, 0.01, 0.005, 0.01,
                                 0.005, 0.005, 0.01, 0.005, 0.0, 0.005]

# Preference score for the k-th nearest district as workplace (unnormalized)
HOME_WORK_DISTANCE_RANKS = np.arange(27)
HOME_WORK_DISTANCE_SCORE = [5, 23, 35, 38, 43, 45.5, 45, 42.5, 38,
                            34.5, 26.5, 21.5, 19, 16, 13, 10, 7.5, 5.5,
                            4, 3, 2, 1.5, 1, 0.5, 0.35, 0.2, 0.1]

# Redraws per ranked district before falling back to the nearest free district
RETRY_FACTOR = 100

ACTIVITY_TYPES = ('home', 'work')
DEFAULT_LEG_MODE = 'car'

# For matrix export
DISTANCE_CSV = 'Distance.csv'
WORKER_CSV = 'Worker.csv'
SEPARATOR = ';'
DECIMAL = ','
THOUSANDS = '.'
FRACTION_DIGITS = 3
TOTAL_COLUMN = 'Gesamt'
METER_TO_KILOMETER = 0.001

# WGS84 -> UTM zone 33N, the projection used for the Karlsruhe network
DEFAULT_SOURCE_CRS = 'EPSG:4326'
DEFAULT_CRS = 'EPSG:32633'

# Raw census counts (inhabitants, workplaces) per Karlsruhe district.
# The published scenario samples 1 in CENSUS_SCALE_FACTOR persons.
CENSUS_SCALE_FACTOR = 50
KARLSRUHE_CENSUS = {
    'Innenstadt Ost': (4692, 1457),
    'Innenstadt West': (7608, 2187),
    'Südstadt': (13469, 1875),
    'Südweststadt': (13792, 1744),
    'Weststadt': (13848, 1630),
    'Nordweststadt': (7072, 237),
    'Oststadt': (15254, 11489),
    'Mühlburg': (10711, 25168),
    'Daxlanden': (6995, 17598),
    'Knielingen': (6319, 51442),
    'Grünwinkel': (6525, 7716),
    'Oberreut': (5818, 2848),
    'Beiertheim-Bulach': (4470, 2159),
    'Weiherfeld-Dammerstock': (3458, 106),
    'Rüppurr': (6340, 1476),
    'Waldstadt': (7289, 290),
    'Rintheim': (3551, 7783),
    'Hagsfeld': (4810, 16677),
    'Durlach': (18716, 41673),
    'Grötzingen': (5606, 2222),
    'Stupferich': (1735, 1365),
    'Hohenwettersbach': (1835, 868),
    'Wolfartsweier': (2047, 421),
    'Grünwettersbach': (2416, 1267),
    'Palmbach': (1187, 289),
    'Neureut': (11682, 14901),
    'Nordstadt': (6506, 1553),
}

# Placemarks in the Karlsruhe district file that are not districts
NON_DISTRICT_PLACEMARKS = ('Landkreisgrenze',)
