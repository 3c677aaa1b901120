"""
Fixed option tables offered to listing forms and filters.
"""

CITIES = [
    "Karachi",
    "Lahore",
    "Islamabad",
    "Rawalpindi",
    "Faisalabad",
    "Multan",
    "Peshawar",
    "Quetta",
    "Gujranwala",
    "Sialkot",
]

PROPERTY_TYPES = [
    {"value": "house", "label": "House"},
    {"value": "apartment", "label": "Apartment"},
    {"value": "plot", "label": "Plot"},
    {"value": "commercial", "label": "Commercial"},
    {"value": "farmhouse", "label": "Farmhouse"},
]

LISTING_TYPES = [
    {"value": "rent", "label": "For Rent"},
    {"value": "sale", "label": "For Sale"},
    {"value": "land", "label": "Land"},
]

SIZE_UNITS = [
    {"value": "marla", "label": "Marla"},
    {"value": "kanal", "label": "Kanal"},
    {"value": "sqft", "label": "Sq. Ft."},
    {"value": "sqyd", "label": "Sq. Yd."},
]

PRICE_UNITS = [
    {"value": "total", "label": "Total Price"},
    {"value": "monthly", "label": "Per Month"},
    {"value": "yearly", "label": "Per Year"},
    {"value": "per_marla", "label": "Per Marla"},
    {"value": "per_kanal", "label": "Per Kanal"},
]

AMENITIES = [
    "Parking",
    "Security",
    "Electricity Backup",
    "Gas",
    "Water Supply",
    "Central Heating",
    "Central Cooling",
    "Lawn/Garden",
    "Swimming Pool",
    "Gym",
    "Elevator",
    "Servant Quarter",
    "Study Room",
    "Store Room",
    "Balcony",
    "Terrace",
    "Drawing Room",
    "Dining Room",
    "Kitchen",
    "Laundry",
    "Internet",
    "Cable TV",
    "Intercom",
    "CCTV",
    "Boundary Wall",
    "Corner Plot",
    "Park Facing",
    "Main Boulevard",
]

SIZE_UNIT_VALUES = [u["value"] for u in SIZE_UNITS]
PRICE_UNIT_VALUES = [u["value"] for u in PRICE_UNITS]
