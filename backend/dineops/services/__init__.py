# Services module

from dineops.services.booking_service import BookingService
from dineops.services.order_service import OrderService
from dineops.services.restaurant_service import RestaurantService
from dineops.services.table_service import TableService
from dineops.services.category_service import CategoryService
from dineops.services.dish_service import DishService
from dineops.services.parking_slot_service import ParkingSlotService
from dineops.services.user_service import UserService
from dineops.services.admin_service import AdminService
from dineops.services.image_upload_service import ImageUploader, get_image_uploader

__all__ = [
    "AdminService",
    "BookingService",
    "CategoryService",
    "DishService",
    "ImageUploader",
    "OrderService",
    "ParkingSlotService",
    "RestaurantService",
    "TableService",
    "UserService",
    "get_image_uploader",
]
