# app/data.py

# Catalog inserted on first startup when the services table is empty
SERVICES = [
    {
        "name": "Precision Cut",
        "description": "Signature consultation + precision shear work + hot towel finish.",
        "price": 4500,
        "duration": 45,
        "category": "main",
    },
    {
        "name": "Beard Sculpt",
        "description": "Hot towel steam + straight razor lineup + oil treatment.",
        "price": 3500,
        "duration": 30,
        "category": "main",
    },
    {
        "name": "The Executive",
        "description": "Full service cut + beard sculpt + black mask facial.",
        "price": 7500,
        "duration": 75,
        "category": "main",
    },
    {
        "name": "Eyebrow Touch-up",
        "description": "Quick razor cleanup between visits.",
        "price": 1500,
        "duration": 15,
        "category": "sporadic",
    },
]
