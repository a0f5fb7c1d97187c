"""Previously-captured NASA payloads served when a default-case lookup fails.

Callers must copy before mutating; use the ``fallback_*`` helpers.
"""

import copy

FALLBACK_APOD = {
    "date": "2024-11-07",
    "title": "LDN 1471: A Windblown Star Cavity",
    "explanation": (
        "What's happening in the Elephant's Trunk?  A dark interstellar cloud of gas and dust "
        "punctuated with newly formed stars is being eroded by the stellar winds and energetic "
        "light from nearby massive stars.  The featured image depicts the central part of the "
        "interstellar dust cloud IC 1396, cataloged as the emission nebula LDN 1471.  Located in "
        "the constellation of the King of Aethopia (Cepheus), the dust cloud forms the surface of "
        "the nebula's bright rim, where an embedded star cluster (Trumpler 37) is being revealed.  "
        "The bright rim is about 10 light-years across and the entire cavity is about 30 "
        "light-years across.  The energetic light from the central bright rim excites atoms in the "
        "cavity above it and is creating the red glow seen emanating from the Elephant's Trunk.  "
        "Located about 2,400 light-years away, the Elephant's Trunk nebula should not be confused "
        "with the somewhat more famous (but further away) Eagle Nebula."
    ),
    "url": "https://apod.nasa.gov/apod/image/2411/ElephantsTrunk_Mtanous_960.jpg",
    "hdurl": "https://apod.nasa.gov/apod/image/2411/ElephantsTrunk_Mtanous_4232.jpg",
    "media_type": "image",
    "service_version": "v1",
}

_FHAZ = {"id": 20, "name": "FHAZ", "full_name": "Front Hazard Avoidance Camera"}
_CURIOSITY = {"id": 5, "name": "Curiosity", "status": "active"}
_RAW = "https://mars.nasa.gov/msl-raw-images/proj/msl/redops/ods/surface/sol"

FALLBACK_ROVER_PHOTOS = [
    {
        "id": 1,
        "sol": 3949,
        "img_src": f"{_RAW}/03949/opgs/edr/fcam/FLB_739290446EDR_F1030564FHAZ00337M_.JPG",
        "earth_date": "2024-01-15",
        "rover": _CURIOSITY,
        "camera": _FHAZ,
    },
    {
        "id": 2,
        "sol": 3948,
        "img_src": f"{_RAW}/03948/opgs/edr/fcam/FLB_739204046EDR_F1030564FHAZ00337M_.JPG",
        "earth_date": "2024-01-14",
        "rover": _CURIOSITY,
        "camera": _FHAZ,
    },
    {
        "id": 3,
        "sol": 3947,
        "img_src": f"{_RAW}/03947/opgs/edr/fcam/FLB_739117646EDR_F1030564FHAZ00337M_.JPG",
        "earth_date": "2024-01-13",
        "rover": _CURIOSITY,
        "camera": _FHAZ,
    },
]


def _neo(neo_id, name, hazardous, dia_min, dia_max, date, velocity_kph, miss_km):
    return {
        "id": neo_id,
        "name": name,
        "nasa_jpl_url": f"https://ssd.jpl.nasa.gov/tools/sbdb_lookup.html#/?sstr={neo_id}",
        "is_potentially_hazardous_asteroid": hazardous,
        "estimated_diameter": {
            "kilometers": {
                "estimated_diameter_min": dia_min,
                "estimated_diameter_max": dia_max,
            },
        },
        "close_approach_data": [
            {
                "close_approach_date": date,
                "relative_velocity": {"kilometers_per_hour": velocity_kph},
                "miss_distance": {"kilometers": miss_km},
                "orbiting_body": "Earth",
            }
        ],
    }


FALLBACK_NEO_FEED = {
    "near_earth_objects": {
        "2024-11-07": [
            _neo("2465633", "465633 (2009 JR5)", True, 0.2659, 0.5947,
                 "2024-11-07", "73588.7263", "45290298.2253"),
            _neo("3426410", "(2008 QV11)", False, 0.0422, 0.0944,
                 "2024-11-07", "23204.9891", "38764558.5508"),
        ],
        "2024-11-08": [
            _neo("3553060", "(2010 XT10)", True, 0.1211, 0.2709,
                 "2024-11-08", "44331.7617", "4834966.4402"),
        ],
    },
    "page": {"total_elements": 3},
}


def fallback_apod() -> dict:
    return copy.deepcopy(FALLBACK_APOD)


def fallback_rover_photos() -> list[dict]:
    return copy.deepcopy(FALLBACK_ROVER_PHOTOS)


def fallback_neo_feed() -> dict:
    return copy.deepcopy(FALLBACK_NEO_FEED)
