from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict

from faker import Faker

fake = Faker()


class AsyncTestDataFactory:
    """Request payloads with realistic random values; ``kwargs`` override."""

    @staticmethod
    def create_course_data(**kwargs: Any) -> Dict[str, Any]:
        return {
            "title": f"{fake.word().title()} Photography Masterclass",
            "description": fake.text(max_nb_chars=200),
            "instructor": fake.name(),
            "duration": "8 weeks",
            "schedule": "Saturdays 10:00-13:00",
            "level": "Beginner",
            "tags": ["portrait", "lighting"],
            "price": "4999.00",
            "what_you_will_learn": ["Manual exposure", "Studio lighting"],
            "prerequisites": ["A camera with manual mode"],
            "curriculum": [
                {
                    "title": "Exposure basics",
                    "duration": "2 weeks",
                    "lessons": [
                        {"title": "Aperture", "duration": "30m", "type": "video"}
                    ],
                }
            ],
            **kwargs,
        }

    @staticmethod
    def create_event_data(**kwargs: Any) -> Dict[str, Any]:
        event_date = datetime.now(timezone.utc) + timedelta(days=30)
        return {
            "title": f"{fake.last_name()} Wedding",
            "event_type": "WEDDING",
            "event_date": event_date.isoformat(),
            "start_time": "10:00",
            "end_time": "18:00",
            "location": fake.city(),
            "city": "Kathmandu",
            "base_price": "1000.00",
            "discount_amount": "0",
            "contact_name": fake.name(),
            "contact_email": fake.email(),
            **kwargs,
        }

    @staticmethod
    def create_catering_data(**kwargs: Any) -> Dict[str, Any]:
        return {
            "name": f"{fake.word().title()} Buffet",
            "category": "MAIN_COURSE",
            "base_price": "500.00",
            "price_per_person": "25.00",
            **kwargs,
        }

    @staticmethod
    def create_equipment_data(**kwargs: Any) -> Dict[str, Any]:
        return {
            "name": f"{fake.word().title()} Light Kit",
            "category": "LIGHTING",
            "brand": "Godox",
            "daily_rental_price": "150.00",
            "security_deposit": "1000.00",
            **kwargs,
        }

    @staticmethod
    def create_booking_data(**kwargs: Any) -> Dict[str, Any]:
        return {
            "full_name": fake.name(),
            "email": fake.email(),
            "phone": "+9779841234567",
            "event_date": (date.today() + timedelta(days=60)).isoformat(),
            "event_time": "14:00",
            "event_location": "Hotel Yak & Yeti, Kathmandu",
            "guest_count": 150,
            "event_type": "Wedding",
            "package_type": "premium",
            "package_name": "Premium Wedding Package",
            "package_price": "NPR 85,000",
            **kwargs,
        }

    @staticmethod
    def create_marketplace_item_data(**kwargs: Any) -> Dict[str, Any]:
        return {
            "title": f"{fake.word().title()} 50mm f/1.8 Lens",
            "description": fake.text(max_nb_chars=200),
            "category": "Lenses",
            "subcategory": "Prime",
            "price": "25000.00",
            "images": ["/uploads/marketplace/lens.jpg"],
            "tags": ["lens", "prime"],
            "seller": {
                "id": "seller-1",
                "name": fake.name(),
                "email": fake.email(),
            },
            "location": {"city": "Pokhara", "country": "Nepal"},
            **kwargs,
        }

    @staticmethod
    def create_hero_data(**kwargs: Any) -> Dict[str, Any]:
        return {
            "title": "Capture every moment",
            "subtitle": "Photography for every occasion",
            "description": fake.text(max_nb_chars=200),
            "background_image": "/uploads/hero/background.jpg",
            **kwargs,
        }

    @staticmethod
    def create_media_data(**kwargs: Any) -> Dict[str, Any]:
        filename = f"{fake.word()}-{fake.lexify('????')}.jpg"
        return {
            "filename": filename,
            "original_name": filename,
            "mime_type": "image/jpeg",
            "size": 204800,
            "url": f"/uploads/media/{filename}",
            "category": "GALLERY",
            "title": fake.sentence(nb_words=3),
            "tags": ["wedding"],
            "price": "0",
            **kwargs,
        }
