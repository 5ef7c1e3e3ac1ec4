# ---------------- Boroughs & Neighborhoods ----------------
BOROUGHS = ["Manhattan", "Brooklyn", "Queens", "Bronx", "Staten Island"]

NEIGHBORHOODS_BY_BOROUGH = {
    "Manhattan": [
        "Upper East Side", "Upper West Side", "Harlem", "East Harlem", "Washington Heights",
        "Inwood", "Midtown", "Chelsea", "Greenwich Village", "Lower East Side",
        "Chinatown", "Financial District",
    ],
    "Brooklyn": [
        "Williamsburg", "Bushwick", "Bedford-Stuyvesant", "Crown Heights", "Park Slope",
        "Sunset Park", "Bay Ridge", "Coney Island", "Flatbush", "East New York", "Brownsville",
    ],
    "Queens": [
        "Astoria", "Long Island City", "Flushing", "Jamaica", "Forest Hills", "Elmhurst",
        "Jackson Heights", "Corona", "Ridgewood", "Bayside", "Far Rockaway",
    ],
    "Bronx": [
        "South Bronx", "Mott Haven", "Hunts Point", "Fordham", "Belmont", "Morris Heights",
        "Riverdale", "Pelham Bay", "Throggs Neck", "Co-op City",
    ],
    "Staten Island": [
        "St. George", "Stapleton", "Port Richmond", "New Brighton", "Tottenville",
        "Great Kills", "Eltingville", "Annadale", "West Brighton",
    ],
}

# (lat, lon) centroids
NEIGHBORHOOD_COORDINATES = {
    # Manhattan
    "Upper East Side": (40.7736, -73.9566),
    "Upper West Side": (40.7870, -73.9754),
    "Harlem": (40.8116, -73.9465),
    "East Harlem": (40.7957, -73.9389),
    "Washington Heights": (40.8501, -73.9366),
    "Inwood": (40.8677, -73.9212),
    "Midtown": (40.7549, -73.9840),
    "Chelsea": (40.7465, -74.0014),
    "Greenwich Village": (40.7336, -74.0027),
    "Lower East Side": (40.7153, -73.9874),
    "Chinatown": (40.7158, -73.9970),
    "Financial District": (40.7074, -74.0113),
    # Brooklyn
    "Williamsburg": (40.7081, -73.9571),
    "Bushwick": (40.6942, -73.9194),
    "Bedford-Stuyvesant": (40.6872, -73.9418),
    "Crown Heights": (40.6689, -73.9423),
    "Park Slope": (40.6710, -73.9778),
    "Sunset Park": (40.6447, -74.0128),
    "Bay Ridge": (40.6259, -74.0300),
    "Coney Island": (40.5755, -73.9707),
    "Flatbush": (40.6527, -73.9593),
    "East New York": (40.6591, -73.8823),
    "Brownsville": (40.6620, -73.9109),
    # Queens
    "Astoria": (40.7722, -73.9300),
    "Long Island City": (40.7447, -73.9485),
    "Flushing": (40.7673, -73.8330),
    "Jamaica": (40.6916, -73.8067),
    "Forest Hills": (40.7185, -73.8448),
    "Elmhurst": (40.7361, -73.8822),
    "Jackson Heights": (40.7557, -73.8831),
    "Corona": (40.7472, -73.8619),
    "Ridgewood": (40.7006, -73.9056),
    "Bayside": (40.7685, -73.7693),
    "Far Rockaway": (40.6054, -73.7551),
    # Bronx
    "South Bronx": (40.8165, -73.9169),
    "Mott Haven": (40.8088, -73.9222),
    "Hunts Point": (40.8134, -73.8833),
    "Fordham": (40.8622, -73.8985),
    "Belmont": (40.8556, -73.8885),
    "Morris Heights": (40.8531, -73.9189),
    "Riverdale": (40.8978, -73.9095),
    "Pelham Bay": (40.8527, -73.8270),
    "Throggs Neck": (40.8156, -73.8236),
    "Co-op City": (40.8742, -73.8300),
    # Staten Island
    "St. George": (40.6437, -74.0776),
    "Stapleton": (40.6267, -74.0779),
    "Port Richmond": (40.6339, -74.1368),
    "New Brighton": (40.6417, -74.0939),
    "Tottenville": (40.5054, -74.2416),
    "Great Kills": (40.5542, -74.1502),
    "Eltingville": (40.5449, -74.1651),
    "Annadale": (40.5395, -74.1788),
    "West Brighton": (40.6282, -74.1098),
}

BOROUGH_COORDINATES = {
    "Manhattan": (40.7831, -73.9712),
    "Brooklyn": (40.6782, -73.9442),
    "Queens": (40.7282, -73.7949),
    "Bronx": (40.8448, -73.8648),
    "Staten Island": (40.5795, -74.1502),
}

NYC_CENTER = (40.7128, -73.9060)

# ---------------- Enumerations ----------------
ORGANIZATION_TYPES = ["church", "ministry", "nonprofit", "civic_group"]
SEVERITIES = ["critical", "high", "medium", "low"]
GAP_STATUSES = ["open", "in_progress", "resolved"]
CAPACITIES = ["low", "medium", "high"]

# ---------------- Seed Data ----------------
DEFAULT_SERVICE_CATEGORIES = [
    ("Food Assistance", "Food pantries, soup kitchens and meal programs"),
    ("Youth Programs", "After-school, mentoring and recreation for young people"),
    ("Education & Tutoring", "Tutoring, literacy and adult education classes"),
    ("Family Support", "Parenting help, childcare and family case management"),
    ("Housing Assistance", "Shelter referrals, rental help and tenant support"),
    ("Mental Health Support", "Counseling, support groups and crisis referrals"),
    ("Senior Services", "Programs and visits for older adults"),
    ("Job Training", "Workforce readiness, resume help and job placement"),
    ("Immigration Services", "Legal clinics, ESL and newcomer support"),
    ("Health Services", "Health screenings, clinics and insurance enrollment"),
]
