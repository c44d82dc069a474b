"""CRUD tests for catalog resources: restaurants, tables, categories, dishes, parking."""

from dineops.models.order import Order, OrderItem
from dineops.models.restaurant import Category, Dish, ParkingSlot, Restaurant, Table, TableStatus


class TestRestaurantCRUD:
    """Test restaurant CRUD operations."""

    def _payload(self, **extra):
        data = {
            "name": "Karachi Kitchen",
            "email": "kk@example.com",
            "password": "supersecret",
            "phone": "+923001234567",
            "address": "7 Clifton",
            "latitude": 32.58,
            "longitude": 73.48,
        }
        data.update(extra)
        return data

    def test_create_restaurant(self, client):
        res = client.post("/api/restaurants", json=self._payload(ranking=4.5))
        assert res.status_code == 201
        restaurant = res.json()["restaurant"]
        assert restaurant["status"] == "DE_ACTIVE"
        assert restaurant["ranking"] == 4.5
        assert restaurant["city"] == ""
        assert "password" not in restaurant
        assert "password_hash" not in restaurant

    def test_duplicate_email(self, client, test_restaurant):
        res = client.post("/api/restaurants", json=self._payload(email=test_restaurant.email))
        assert res.status_code == 409
        assert res.json()["error"] == "Restaurant with this email already exists"

    def test_required_fields(self, client):
        data = self._payload()
        del data["latitude"]
        res = client.post("/api/restaurants", json=data)
        assert res.status_code == 400

    def test_invalid_coordinates(self, client):
        res = client.post("/api/restaurants", json=self._payload(latitude=91))
        assert res.status_code == 400
        assert res.json()["error"] == "Invalid latitude value"

        res = client.post("/api/restaurants", json=self._payload(longitude=-181))
        assert res.json()["error"] == "Invalid longitude value"

    def test_invalid_email_and_ranking(self, client):
        res = client.post("/api/restaurants", json=self._payload(email="not-an-email"))
        assert res.json()["error"] == "Invalid email format"

        res = client.post("/api/restaurants", json=self._payload(ranking=5.5))
        assert res.json()["error"] == "Ranking must be between 0.0 and 5.0"

    def test_get_and_list(self, client, test_restaurant):
        res = client.get(f"/api/restaurants/{test_restaurant.id}")
        assert res.status_code == 200
        assert res.json()["name"] == "Test Bistro"

        res = client.get("/api/restaurants")
        assert [r["id"] for r in res.json()] == [test_restaurant.id]

        res = client.get("/api/restaurants/9999")
        assert res.status_code == 404

    def test_update(self, client, db_session, test_restaurant, other_restaurant):
        res = client.put(f"/api/restaurants/{test_restaurant.id}", json={"cuisine": "Pakistani", "capacity": 40})
        assert res.status_code == 200
        assert res.json()["cuisine"] == "Pakistani"
        assert res.json()["capacity"] == 40

        res = client.put(f"/api/restaurants/{test_restaurant.id}", json={"email": other_restaurant.email})
        assert res.status_code == 409

        res = client.put(f"/api/restaurants/{test_restaurant.id}", json={})
        assert res.status_code == 400

    def test_update_keeps_url_logo(self, client, test_restaurant):
        res = client.put(
            f"/api/restaurants/{test_restaurant.id}",
            json={"logo": "https://cdn.example.com/logo.png"},
        )
        assert res.status_code == 200
        assert res.json()["logo"] == "https://cdn.example.com/logo.png"

    def test_full_view(self, client, test_restaurant, test_table, test_dish):
        res = client.get(f"/api/restaurants/{test_restaurant.id}/full")
        assert res.status_code == 200
        body = res.json()
        assert [t["table_number"] for t in body["tables"]] == ["T1"]
        assert body["categories"][0]["name"] == "Mains"
        assert body["categories"][0]["dishes"][0]["name"] == "Chicken Karahi"

    def test_scoped_listings(self, client, db_session, test_restaurant, test_table, test_dish):
        db_session.add(ParkingSlot(restaurant_id=test_restaurant.id, slot_number="P1"))
        db_session.commit()

        assert len(client.get(f"/api/restaurants/{test_restaurant.id}/tables").json()) == 1
        assert len(client.get(f"/api/restaurants/{test_restaurant.id}/categories").json()) == 1
        assert len(client.get(f"/api/restaurants/{test_restaurant.id}/parking_slots").json()) == 1
        menu = client.get(f"/api/restaurants/{test_restaurant.id}/menu").json()
        assert menu[0]["dishes"][0]["price"] == 12.5

    def test_status_update_requires_admin(self, client, test_restaurant, user_headers, admin_headers):
        res = client.patch(f"/api/restaurants/{test_restaurant.id}/status", json={"status": "DE_ACTIVE"})
        assert res.status_code == 401

        res = client.patch(
            f"/api/restaurants/{test_restaurant.id}/status",
            json={"status": "DE_ACTIVE"},
            headers=user_headers,
        )
        assert res.status_code == 403

        res = client.patch(
            f"/api/restaurants/{test_restaurant.id}/status",
            json={"status": "DE_ACTIVE"},
            headers=admin_headers,
        )
        assert res.status_code == 200
        assert res.json()["status"] == "DE_ACTIVE"

    def test_delete_blocked_by_dependents(self, client, db_session, test_restaurant, test_table, admin_headers):
        res = client.delete(f"/api/restaurants/{test_restaurant.id}", headers=admin_headers)
        assert res.status_code == 409
        assert db_session.get(Restaurant, test_restaurant.id) is not None

    def test_delete_empty_restaurant(self, client, db_session, other_restaurant, admin_headers):
        res = client.delete(f"/api/restaurants/{other_restaurant.id}", headers=admin_headers)
        assert res.status_code == 200
        assert client.get(f"/api/restaurants/{other_restaurant.id}").status_code == 404


class TestTableCRUD:
    """Test table CRUD operations."""

    def test_create_table(self, client, test_restaurant):
        res = client.post(
            "/api/tables",
            json={"restaurant_id": test_restaurant.id, "table_number": "A1", "capacity": 6, "status": "AVAILABLE"},
        )
        assert res.status_code == 201
        assert res.json()["table_number"] == "A1"

    def test_duplicate_number(self, client, test_restaurant, test_table):
        res = client.post(
            "/api/tables",
            json={"restaurant_id": test_restaurant.id, "table_number": "T1", "capacity": 2, "status": "AVAILABLE"},
        )
        assert res.status_code == 409
        assert res.json()["error"] == "Table number already exists for this restaurant"

    def test_same_number_in_other_restaurant(self, client, other_restaurant, test_table):
        res = client.post(
            "/api/tables",
            json={"restaurant_id": other_restaurant.id, "table_number": "T1", "capacity": 2, "status": "AVAILABLE"},
        )
        assert res.status_code == 201

    def test_invalid_capacity_and_status(self, client, test_restaurant):
        base = {"restaurant_id": test_restaurant.id, "table_number": "B1", "status": "AVAILABLE"}
        res = client.post("/api/tables", json={**base, "capacity": 0})
        assert res.status_code == 400
        assert res.json()["error"] == "Capacity must be a positive number"

        res = client.post("/api/tables", json={**base, "capacity": 2, "status": "BROKEN"})
        assert res.json()["error"] == "Status must be AVAILABLE, OCCUPIED, or RESERVED"

    def test_list_tables(self, client, test_table):
        res = client.get("/api/tables")
        assert res.status_code == 200
        assert res.json()["status"] is True
        assert len(res.json()["data"]) == 1

    def test_update_table(self, client, test_restaurant, test_table):
        res = client.put(
            f"/api/tables/{test_table.id}",
            json={"restaurant_id": test_restaurant.id, "status": "OCCUPIED"},
        )
        assert res.status_code == 200
        assert res.json()["message"] == "Table updated successfully"
        assert res.json()["data"]["status"] == "OCCUPIED"

    def test_update_requires_ownership(self, client, test_table, other_restaurant):
        res = client.put(
            f"/api/tables/{test_table.id}",
            json={"restaurant_id": other_restaurant.id, "capacity": 8},
        )
        assert res.status_code == 403
        assert res.json()["error"] == "Table does not belong to this restaurant"

    def test_update_needs_a_field(self, client, test_restaurant, test_table):
        res = client.put(f"/api/tables/{test_table.id}", json={"restaurant_id": test_restaurant.id})
        assert res.status_code == 400
        assert res.json()["error"] == "At least one of table_number, capacity, or status must be provided"

    def test_delete_blocked_by_booking(self, client, db_session, test_table, confirmed_booking):
        res = client.delete(f"/api/tables/{test_table.id}")
        assert res.status_code == 409
        assert res.json()["error"] == "Cannot delete table with existing bookings"
        db_session.refresh(test_table)
        assert test_table.status == TableStatus.RESERVED

    def test_delete_table(self, client, db_session, test_table):
        res = client.delete(f"/api/tables/{test_table.id}")
        assert res.status_code == 200
        assert db_session.query(Table).count() == 0


class TestCategoryCRUD:
    """Test category CRUD operations."""

    def test_create_category(self, client, test_restaurant):
        res = client.post(
            "/api/categories",
            json={"restaurant_id": test_restaurant.id, "name": "Drinks", "imgurl": "https://img.example.com/d.png"},
        )
        assert res.status_code == 201
        assert res.json()["message"] == "Category created successfully"
        assert res.json()["data"]["imgurl"] == "https://img.example.com/d.png"

    def test_bad_imgurl(self, client, test_restaurant):
        res = client.post(
            "/api/categories",
            json={"restaurant_id": test_restaurant.id, "name": "Drinks", "imgurl": "ftp://x"},
        )
        assert res.status_code == 400
        assert res.json()["error"] == "imgurl must be a valid URL"

    def test_duplicate_name(self, client, test_restaurant, test_category):
        res = client.post("/api/categories", json={"restaurant_id": test_restaurant.id, "name": "Mains"})
        assert res.status_code == 409
        assert res.json()["error"] == "Category name already exists for this restaurant"

    def test_list_requires_restaurant(self, client, test_category, test_restaurant):
        res = client.get("/api/categories")
        assert res.status_code == 400

        res = client.get("/api/categories", params={"restaurant_id": test_restaurant.id})
        assert [c["name"] for c in res.json()["data"]] == ["Mains"]

    def test_update_keeps_imgurl(self, client, db_session, test_restaurant, test_category):
        test_category.imgurl = "https://img.example.com/m.png"
        db_session.commit()

        res = client.put(
            f"/api/categories/{test_category.id}",
            json={"restaurant_id": test_restaurant.id, "name": "Main Course"},
        )
        assert res.status_code == 200
        assert res.json()["data"]["name"] == "Main Course"
        assert res.json()["data"]["imgurl"] == "https://img.example.com/m.png"

    def test_update_requires_name_and_ownership(self, client, test_category, test_restaurant, other_restaurant):
        res = client.put(f"/api/categories/{test_category.id}", json={"restaurant_id": test_restaurant.id})
        assert res.json()["error"] == "Category name is required"

        res = client.put(
            f"/api/categories/{test_category.id}",
            json={"restaurant_id": other_restaurant.id, "name": "Stolen"},
        )
        assert res.status_code == 403

    def test_delete_blocked_by_dishes(self, client, db_session, test_category, test_dish):
        res = client.delete(f"/api/categories/{test_category.id}")
        assert res.status_code == 409
        assert res.json()["error"] == "Cannot delete category with existing dishes"
        assert db_session.query(Category).count() == 1

    def test_delete_category(self, client, db_session, test_category):
        res = client.delete(f"/api/categories/{test_category.id}")
        assert res.status_code == 200
        assert db_session.query(Category).count() == 0


class TestDishCRUD:
    """Test dish CRUD operations."""

    def test_create_dish(self, client, test_category):
        res = client.post("/api/menus", json={"category_id": test_category.id, "name": "Daal", "price": 4.25})
        assert res.status_code == 201
        dish = res.json()["data"]
        assert dish["available"] is True
        assert dish["price"] == 4.25
        assert dish["category"] == {"name": "Mains"}

    def test_zero_price(self, client, db_session, test_category):
        res = client.post("/api/menus", json={"category_id": test_category.id, "name": "Free", "price": 0})
        assert res.status_code == 400
        assert res.json()["error"] == "Price must be a positive number"
        assert db_session.query(Dish).count() == 0

    def test_name_unique_across_categories(self, client, db_session, test_restaurant, test_dish):
        starters = Category(restaurant_id=test_restaurant.id, name="Starters")
        db_session.add(starters)
        db_session.commit()

        res = client.post("/api/menus", json={"category_id": starters.id, "name": "Chicken Karahi", "price": 9})
        assert res.status_code == 409
        assert res.json()["error"] == "Dish name already exists for this restaurant"

    def test_same_name_in_other_restaurant(self, client, db_session, other_restaurant, test_dish):
        grill = Category(restaurant_id=other_restaurant.id, name="Grill")
        db_session.add(grill)
        db_session.commit()

        res = client.post("/api/menus", json={"category_id": grill.id, "name": "Chicken Karahi", "price": 9})
        assert res.status_code == 201

    def test_list_by_restaurant(self, client, test_restaurant, test_dish, other_dish):
        res = client.get("/api/menus", params={"restaurant_id": test_restaurant.id})
        assert [d["name"] for d in res.json()["data"]] == ["Chicken Karahi"]

    def test_update_dish(self, client, test_dish):
        res = client.put(f"/api/menus/{test_dish.id}", json={"price": 13, "available": False})
        assert res.status_code == 200
        assert res.json()["data"]["price"] == 13.0
        assert res.json()["data"]["available"] is False

    def test_move_to_foreign_category(self, client, test_dish, other_dish):
        res = client.put(f"/api/menus/{test_dish.id}", json={"category_id": other_dish.category_id})
        assert res.status_code == 403
        assert res.json()["error"] == "Category does not belong to the same restaurant as the dish"

    def test_delete_blocked_by_order_items(self, client, db_session, test_dish, test_user, test_restaurant):
        order = Order(user_id=test_user.id, restaurant_id=test_restaurant.id, total_amount=12.5, order_type="takeaway")
        db_session.add(order)
        db_session.flush()
        db_session.add(OrderItem(order_id=order.id, dish_id=test_dish.id, unit_rate=12.5, quantity=1, price=12.5))
        db_session.commit()

        res = client.delete(f"/api/menus/{test_dish.id}")
        assert res.status_code == 409
        assert res.json()["error"] == "Cannot delete dish with existing order items"
        assert db_session.query(Dish).count() == 1

    def test_delete_dish(self, client, db_session, test_dish):
        res = client.delete(f"/api/menus/{test_dish.id}")
        assert res.status_code == 200
        assert client.get(f"/api/menus/{test_dish.id}").status_code == 404


class TestParkingSlotCRUD:
    """Test parking slot CRUD operations."""

    def test_create_and_duplicate(self, client, test_restaurant):
        payload = {"restaurant_id": test_restaurant.id, "slot_number": "P1", "status": "AVAILABLE"}
        res = client.post("/api/parking_slots", json=payload)
        assert res.status_code == 201
        assert res.json()["data"]["slot_number"] == "P1"

        res = client.post("/api/parking_slots", json=payload)
        assert res.status_code == 409
        assert res.json()["error"] == "Slot number already exists for this restaurant"

    def test_invalid_status(self, client, test_restaurant):
        res = client.post(
            "/api/parking_slots",
            json={"restaurant_id": test_restaurant.id, "slot_number": "P2", "status": "FLOODED"},
        )
        assert res.status_code == 400

    def test_update_ownership(self, client, db_session, test_restaurant, other_restaurant):
        slot = ParkingSlot(restaurant_id=test_restaurant.id, slot_number="P3")
        db_session.add(slot)
        db_session.commit()

        res = client.put(
            f"/api/parking_slots/{slot.id}",
            json={"restaurant_id": other_restaurant.id, "status": "OCCUPIED"},
        )
        assert res.status_code == 403
        assert res.json()["error"] == "Parking slot does not belong to this restaurant"

        res = client.put(
            f"/api/parking_slots/{slot.id}",
            json={"restaurant_id": test_restaurant.id, "status": "OCCUPIED"},
        )
        assert res.status_code == 200
        assert res.json()["data"]["status"] == "OCCUPIED"

    def test_delete(self, client, db_session, test_restaurant):
        slot = ParkingSlot(restaurant_id=test_restaurant.id, slot_number="P4")
        db_session.add(slot)
        db_session.commit()

        res = client.delete(f"/api/parking_slots/{slot.id}")
        assert res.status_code == 200
        assert db_session.query(ParkingSlot).count() == 0


class TestUserCRUD:
    """Test customer account operations."""

    def test_sign_up(self, client):
        res = client.post(
            "/api/users",
            json={
                "email": "new@example.com",
                "password": "longenough",
                "name": "New Person",
                "city": "Lahore",
                "address": "9 Mall Road",
            },
        )
        assert res.status_code == 201
        assert res.json()["status"] == "success"
        assert res.json()["user"]["email"] == "new@example.com"
        assert "password_hash" not in res.json()["user"]

    def test_short_password_and_duplicate(self, client, test_user):
        base = {"name": "X", "city": "Y", "address": "Z"}
        res = client.post("/api/users", json={**base, "email": "x@example.com", "password": "short"})
        assert res.json()["error"] == "Password must be at least 8 characters long"

        res = client.post("/api/users", json={**base, "email": test_user.email, "password": "longenough"})
        assert res.status_code == 409

    def test_lookup(self, client, test_user):
        res = client.get("/api/users", params={"email": test_user.email})
        assert res.json()["user"]["id"] == test_user.id

        res = client.get("/api/users", params={"id": test_user.id, "email": test_user.email})
        assert res.status_code == 400
        assert res.json()["error"] == "Provide either id or email, not both"

        res = client.get("/api/users")
        assert len(res.json()["users"]) == 1

    def test_update_and_delete(self, client, db_session, test_user):
        res = client.put(f"/api/users/{test_user.id}", json={"phone": "+920000"})
        assert res.status_code == 200
        assert res.json()["phone"] == "+920000"

        res = client.put(f"/api/users/{test_user.id}", json={})
        assert res.status_code == 400

        res = client.delete(f"/api/users/{test_user.id}")
        assert res.status_code == 200
        assert client.get(f"/api/users/{test_user.id}").status_code == 404

    def test_delete_blocked_by_bookings(self, client, db_session, test_user, confirmed_booking):
        confirmed_booking.user_id = test_user.id
        db_session.commit()

        res = client.delete(f"/api/users/{test_user.id}")
        assert res.status_code == 409
