# Bundled catalog and demo accounts. All prices are in PKR.

HOTELS = [
    {
        "id": 1,
        "name": "Makkah Clock Royal Tower, A Fairmont Hotel",
        "city": "Makkah",
        "address": "King Abdul Aziz Endowment, Makkah 21955, Saudi Arabia",
        "available_from": "2026-01-01",
        "available_to": "2027-12-31",
        "distance_to_haram": 100,
        "rating": 5,
        "price_start": 264500,
        "image_url": "https://picsum.photos/seed/makkah1/800/600",
        "description": "Located adjacent to the Masjid al Haram, this luxury hotel offers unparalleled views and premium services.",
        "amenities": ["Free WiFi", "Fitness Center", "Restaurant", "Room Service", "Family Rooms", "Kaaba View"],
        "rooms": [
            {"id": "1-1", "type": "Double", "purchase_price_per_night": 208900, "agent_price_per_night": 236800, "customer_price_per_night": 264500, "available": True},
            {"id": "1-2", "type": "Suite", "purchase_price_per_night": 417800, "agent_price_per_night": 459600, "customer_price_per_night": 501300, "available": True},
            {"id": "1-3", "type": "Quad", "purchase_price_per_night": 334200, "agent_price_per_night": 376000, "customer_price_per_night": 417800, "available": False},
        ],
    },
    {
        "id": 2,
        "name": "Pullman ZamZam Makkah",
        "city": "Makkah",
        "address": "Abraj Al Bait Complex, Makkah 21955, Saudi Arabia",
        "available_from": "2026-01-01",
        "available_to": "2027-12-31",
        "distance_to_haram": 150,
        "rating": 5,
        "price_start": 222800,
        "image_url": "https://picsum.photos/seed/makkah2/800/600",
        "description": "Facing the King Abdulaziz Gate, with easy access to the Holy Mosque and partial Haram views.",
        "amenities": ["Free WiFi", "Restaurant", "Family Rooms", "24-hour front desk"],
        "rooms": [
            {"id": "2-1", "type": "Double", "purchase_price_per_night": 181000, "agent_price_per_night": 199000, "customer_price_per_night": 222800, "available": True},
            {"id": "2-2", "type": "Suite", "purchase_price_per_night": 376000, "agent_price_per_night": 417800, "customer_price_per_night": 459600, "available": True},
        ],
    },
    {
        "id": 3,
        "name": "Dar Al-Hijra InterContinental Madinah",
        "city": "Madina",
        "address": "King Fahd Rd, Badaah, Medina 42311, Saudi Arabia",
        "available_from": "2026-01-01",
        "available_to": "2027-12-31",
        "distance_to_haram": 300,
        "rating": 5,
        "price_start": 208900,
        "image_url": "https://picsum.photos/seed/madina1/800/600",
        "description": "Overlooking the Prophet's Mosque, with spacious rooms and fine dining.",
        "amenities": ["Free WiFi", "Restaurant", "Business Center", "Room Service"],
        "rooms": [
            {"id": "3-1", "type": "Double", "purchase_price_per_night": 167100, "agent_price_per_night": 189400, "customer_price_per_night": 208900, "available": True},
            {"id": "3-2", "type": "Single", "purchase_price_per_night": 125300, "agent_price_per_night": 139300, "customer_price_per_night": 153200, "available": False},
            {"id": "3-3", "type": "Suite", "purchase_price_per_night": 306400, "agent_price_per_night": 348100, "customer_price_per_night": 389900, "available": True},
        ],
    },
    {
        "id": 4,
        "name": "Anwar Al Madinah Mövenpick Hotel",
        "city": "Madina",
        "address": "Central Area, Medina 41499, Saudi Arabia",
        "available_from": "2026-01-01",
        "available_to": "2027-12-31",
        "distance_to_haram": 50,
        "rating": 5,
        "price_start": 250700,
        "image_url": "https://picsum.photos/seed/madina2/800/600",
        "description": "One of the closest hotels to the Prophet's Mosque and Madinah's largest hotel complex.",
        "amenities": ["Free WiFi", "4 Restaurants", "Family Rooms", "ATM on site"],
        "rooms": [
            {"id": "4-1", "type": "Quad", "purchase_price_per_night": 306400, "agent_price_per_night": 351000, "customer_price_per_night": 389900, "available": True},
            {"id": "4-2", "type": "Double", "purchase_price_per_night": 200500, "agent_price_per_night": 225600, "customer_price_per_night": 250700, "available": True},
        ],
    },
    {
        "id": 5,
        "name": "Swissôtel Al Maqam Makkah",
        "city": "Makkah",
        "address": "Ibrahim Al Khalil Street, Makkah 21955, Saudi Arabia",
        "available_from": "2026-01-01",
        "available_to": "2027-12-31",
        "distance_to_haram": 200,
        "rating": 5,
        "price_start": 245100,
        "image_url": "https://picsum.photos/seed/makkah3/800/600",
        "description": "Part of the Abraj Al Bait complex, with direct Kaaba views and a private entrance to the Masjid al Haram.",
        "amenities": ["Direct Haram Access", "Restaurant", "Room Service", "Kaaba View"],
        "rooms": [
            {"id": "5-1", "type": "Double", "purchase_price_per_night": 195000, "agent_price_per_night": 220000, "customer_price_per_night": 245100, "available": True},
            {"id": "5-2", "type": "Suite", "purchase_price_per_night": 445700, "agent_price_per_night": 487500, "customer_price_per_night": 543200, "available": True},
        ],
    },
    {
        "id": 6,
        "name": "Madinah Hilton",
        "city": "Madina",
        "address": "King Fahd Rd, Opposite Prophet Masjid, Medina 56000, Saudi Arabia",
        "available_from": "2026-01-01",
        "available_to": "2027-12-31",
        "distance_to_haram": 100,
        "rating": 4,
        "price_start": 181000,
        "image_url": "https://picsum.photos/seed/madina3/800/600",
        "description": "On the edge of the Prophet's Mosque, with shopping and dining inside the hotel building.",
        "amenities": ["Free WiFi", "Restaurant", "Shopping Mall", "Room Service"],
        "rooms": [
            {"id": "6-1", "type": "Double", "purchase_price_per_night": 139300, "agent_price_per_night": 162900, "customer_price_per_night": 181000, "available": True},
            {"id": "6-2", "type": "Single", "purchase_price_per_night": 97500, "agent_price_per_night": 111400, "customer_price_per_night": 125300, "available": True},
        ],
    },
]

AGENCIES = [
    {
        "id": "AHT-001",
        "profile": {
            "agency_name": "Al-Huda Travels",
            "agency_id": "AHT-001",
            "iata_code": "22-3 4567-8",
            "contact_email": "bookings@alhudatravels.com",
            "contact_number": "+966 12 345 6789",
        },
        "status": "Active",
        "wallet_balance": 13930000,
    },
    {
        "id": "NT-002",
        "profile": {
            "agency_name": "Noor Tours",
            "agency_id": "NT-002",
            "iata_code": "33-1 9876-5",
            "contact_email": "contact@noortours.com",
            "contact_number": "+971 4 321 9876",
        },
        "status": "Active",
        "wallet_balance": 7000000,
    },
    {
        "id": "ITP-003",
        "profile": {
            "agency_name": "Iman Travel Pakistan",
            "agency_id": "ITP-003",
            "iata_code": "11-2 1234-5",
            "contact_email": "info@imantravel.pk",
            "contact_number": "+92 301 8765432",
        },
        "status": "Inactive",
        "wallet_balance": 0,
    },
]

PROMO_CODES = [
    {"code": "UMRAH2024", "discount": 10, "type": "percentage"},
    {"code": "SAVE100", "discount": 100, "type": "fixed"},
]

# Used only when the remote booking API cannot be reached at startup.
# Rows use the remote API's column names.
BOOKINGS = [
    {
        "id": "BK12345", "hotel_id": 1, "room_id": "1-1",
        "guest_name": "Ahmad Khan", "guest_email": "ahmad.khan@example.com", "contact_number": "+92 300 1234567",
        "check_in_date": "2026-08-10", "check_out_date": "2026-08-15", "total_price": 1322500,
        "status": "Confirmed", "payment_method": "Online",
    },
    {
        "id": "BK12346", "hotel_id": 4, "room_id": "4-2",
        "guest_name": "Fatima Al-Sayed", "guest_email": "fatima.as@example.com", "contact_number": "+20 100 123 4567",
        "check_in_date": "2026-08-12", "check_out_date": "2026-08-18", "total_price": 1500000,
        "status": "Confirmed", "payment_method": "Cash",
    },
    {
        "id": "BK12347", "hotel_id": 2, "room_id": "2-2",
        "guest_name": "Yusuf Ali", "guest_email": "yusuf.ali@example.com", "contact_number": "+966 50 123 4567",
        "check_in_date": "2026-09-01", "check_out_date": "2026-09-10", "total_price": 4136400,
        "status": "Pending", "payment_method": "Online",
        "agent_details": AGENCIES[0]["profile"], "booking_type": "agent-assigned",
    },
    {
        "id": "BK12348", "hotel_id": 5, "room_id": "5-1",
        "guest_name": "Aisha Begum", "guest_email": "a.begum@example.com", "contact_number": "+44 20 7946 0958",
        "check_in_date": "2026-09-05", "check_out_date": "2026-09-12", "total_price": 2729300,
        "status": "Confirmed", "payment_method": "Online",
        "agent_details": AGENCIES[1]["profile"], "booking_type": "agent-assigned",
    },
]

SETTINGS = {
    "id": "site",
    "logo_url": None,
    "announcement": "",
}
