import unittest
from unittest.mock import MagicMock

from bson import ObjectId
from fastapi import HTTPException

from app.dtos import CarUpdateRequest, VideoTestimonialFeatureRequest
from app.models.entities.car import Car
from app.models.entities.category import Category
from app.models.entities.review import Review
from app.models.entities.video_testimonial import VideoTestimonial
from app.services.car_service import CarService, clean_updates
from app.services.category_service import car_count_query
from app.services.review_service import ReviewService
from app.services.user_service import UserService
from app.services.video_testimonial_service import VideoTestimonialService


def make_car(**overrides):
    values = dict(
        _id=ObjectId(), brand="Ferrari", model="Roma", name="Ferrari Roma", year=2022,
        transmission="Automatic", fuel="Petrol", mileage=500, daily_price=1500,
        images=["https://cdn/roma.jpg"],
    )
    values.update(overrides)
    return Car(**values)


class TestReviewServiceMock(unittest.TestCase):
    def setUp(self):
        self.service = ReviewService(db=MagicMock())
        self.service.review_repo = MagicMock()
        self.service.car_repo = MagicMock()

    def test_stats_fill_every_rating(self):
        car_id = ObjectId()
        self.service.review_repo.rating_distribution.return_value = {5: 2, 4: 1}

        stats = self.service.get_stats(str(car_id))

        self.service.review_repo.rating_distribution.assert_called_once_with(car_id)
        self.assertEqual(stats.total_reviews, 3)
        self.assertEqual(stats.average_rating, 4.7)
        self.assertEqual(stats.rating_distribution, {1: 0, 2: 0, 3: 0, 4: 1, 5: 2})

    def test_stats_for_invalid_id_skip_the_database(self):
        stats = self.service.get_stats("nope")
        self.service.review_repo.rating_distribution.assert_not_called()
        self.assertEqual(stats.average_rating, 0)

    def test_reject_deletes(self):
        self.service.review_repo.delete_one.return_value = True
        self.assertIsNone(self.service.apply_action("abc", "reject"))
        self.service.review_repo.delete_one.assert_called_once_with("abc")

    def test_toggle_featured_flips_flag(self):
        review = Review(_id=ObjectId(), car_id=ObjectId(), user_name="A", rating=4,
                        title="t", comment="c", is_featured=True)
        self.service.review_repo.find_by_id.return_value = review
        self.service.review_repo.update_one.return_value = review

        self.service.apply_action(str(review.id), "toggleFeatured")

        self.service.review_repo.update_one.assert_called_once_with(
            review.id, {"is_featured": False}
        )

    def test_missing_review_is_404(self):
        self.service.review_repo.update_one.return_value = None
        with self.assertRaises(HTTPException) as ctx:
            self.service.apply_action("abc", "approve")
        self.assertEqual(ctx.exception.status_code, 404)


class TestVideoTestimonialServiceMock(unittest.TestCase):
    def setUp(self):
        self.service = VideoTestimonialService(db=MagicMock())
        self.service.repo = MagicMock()

    def make(self, **overrides):
        values = dict(_id=ObjectId(), user_name="A", title="t", comment="c",
                      video_url="https://cdn/v.mp4")
        values.update(overrides)
        return VideoTestimonial(**values)

    def test_featuring_clears_company_siblings(self):
        testimonial = self.make(user_company="Acme", is_featured=True)
        self.service.repo.update_one.return_value = testimonial

        self.service.set_featured("abc", VideoTestimonialFeatureRequest(is_featured=True))

        self.service.repo.unfeature_company.assert_called_once_with("Acme", testimonial.id)

    def test_unfeaturing_or_no_company_leaves_others(self):
        self.service.repo.update_one.return_value = self.make(is_featured=True)
        self.service.set_featured("abc", VideoTestimonialFeatureRequest(is_featured=True))
        self.service.repo.update_one.return_value = self.make(user_company="Acme")
        self.service.set_featured("abc", VideoTestimonialFeatureRequest(is_featured=False))
        self.service.repo.unfeature_company.assert_not_called()

    def test_missing_testimonial_is_404(self):
        self.service.repo.update_one.return_value = None
        with self.assertRaises(HTTPException) as ctx:
            self.service.set_featured("abc", VideoTestimonialFeatureRequest(is_featured=True))
        self.assertEqual(ctx.exception.status_code, 404)


class TestCarServiceMock(unittest.TestCase):
    def setUp(self):
        self.service = CarService(db=MagicMock())
        self.service.car_repo = MagicMock()

    def test_update_converts_reference_ids(self):
        car = make_car()
        brand_id = ObjectId()
        self.service.car_repo.find_by_id.return_value = car
        self.service.car_repo.update_one.return_value = car

        self.service.update_car(str(car.id), CarUpdateRequest(brand_id=str(brand_id)))

        updates = self.service.car_repo.update_one.call_args.args[1]
        self.assertEqual(updates, {"brand_id": brand_id})

    def test_update_checks_merged_discount(self):
        self.service.car_repo.find_by_id.return_value = make_car(discounted_price=1000)
        with self.assertRaises(HTTPException) as ctx:
            self.service.update_car("x", CarUpdateRequest(daily_price=900))
        self.assertEqual(ctx.exception.status_code, 400)
        self.service.car_repo.update_one.assert_not_called()

    def test_clean_updates_keeps_only_clearable_nulls(self):
        self.assertEqual(
            clean_updates({"name": None, "engine": None, "year": 2020}, {"engine"}),
            {"engine": None, "year": 2020},
        )


class TestCategoryCarCount(unittest.TestCase):
    def test_match_depends_on_type(self):
        car_type = Category(_id=ObjectId(), name="SUV", slug="suv", type="carType")
        query = car_count_query(car_type)
        self.assertEqual(query["$or"][0], {"category_id": car_type.id})
        self.assertTrue(query["available"])

        fuel = Category(name="Hybrid", slug="hybrid", type="fuelType")
        self.assertEqual(car_count_query(fuel)["fuel"], {"$regex": "Hybrid", "$options": "i"})

        tag = Category(name="Family", slug="family", type="tag")
        self.assertIn("tags", car_count_query(tag))


class TestDefaultAdmin(unittest.TestCase):
    def test_skipped_when_super_admin_exists(self):
        service = UserService(db=MagicMock())
        service.user_repo = MagicMock()
        service.user_repo.exists_with_role.return_value = True

        self.assertFalse(service.ensure_default_admin("a@esrent.com", "secret123", "A"))
        service.user_repo.create_user.assert_not_called()


if __name__ == "__main__":
    unittest.main()
