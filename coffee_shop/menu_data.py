DEFAULT_MENU_ITEMS = [
    {
        "name": "Espresso",
        "description": "Rich and bold espresso shot",
        "base_price": 2.50,
        "category": "Coffee",
        "item_type": "Coffee",
        "coffee_type": "ESPRESSO",
    },
    {
        "name": "Americano",
        "description": "Espresso with hot water",
        "base_price": 3.00,
        "category": "Coffee",
        "item_type": "Coffee",
        "coffee_type": "AMERICANO",
    },
    {
        "name": "Latte",
        "description": "Espresso with steamed milk",
        "base_price": 4.50,
        "category": "Coffee",
        "item_type": "Coffee",
        "coffee_type": "LATTE",
    },
    {
        "name": "Cappuccino",
        "description": "Espresso with steamed milk and foam",
        "base_price": 4.00,
        "category": "Coffee",
        "item_type": "Coffee",
        "coffee_type": "CAPPUCCINO",
    },
    {
        "name": "Mocha",
        "description": "Espresso with chocolate and steamed milk",
        "base_price": 5.00,
        "category": "Coffee",
        "item_type": "Coffee",
        "coffee_type": "MOCHA",
    },
]

DEFAULT_CUSTOMERS = [
    {"name": "John Doe", "email": "john.doe@email.com", "phone": "555-0101", "loyalty_points": 25.50},
    {"name": "Jane Smith", "email": "jane.smith@email.com", "phone": "555-0102", "loyalty_points": 15.75},
    {"name": "Bob Johnson", "email": "bob.johnson@email.com", "phone": "555-0103", "loyalty_points": 42.25},
]

# (table number, capacity)
DEFAULT_TABLES = [(1, 2), (2, 4), (3, 2), (4, 6), (5, 4)]
