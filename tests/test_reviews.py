from bson import ObjectId

from tests.helpers import ApiTestCase, car_payload


class TestReviews(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.headers = self.admin_headers()
        car = self.client.post("/api/cars", json=car_payload(), headers=self.headers)
        self.car_id = car.json()["id"]

    def review_payload(self, **overrides):
        payload = {
            "carId": self.car_id,
            "userName": "Jamie",
            "userEmail": "jamie@example.com",
            "rating": 5,
            "title": "Unforgettable",
            "comment": "Smooth handover and a spotless car.",
        }
        payload.update(overrides)
        return payload

    def submit(self, **overrides):
        response = self.client.post("/api/reviews", json=self.review_payload(**overrides))
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["data"]

    def test_submission_is_held_for_moderation(self):
        response = self.client.post(
            "/api/reviews",
            json=self.review_payload(isApproved=True, isFeatured=True),
        )
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertIn("after approval", body["message"])
        self.assertFalse(body["data"]["isApproved"])
        self.assertFalse(body["data"]["isFeatured"])
        self.assertFalse(body["data"]["isAdminCreated"])

        public = self.client.get("/api/reviews", params={"carId": self.car_id}).json()
        self.assertEqual(public["total"], 0)

    def test_rating_out_of_range_is_400(self):
        for rating in (0, 6):
            response = self.client.post("/api/reviews", json=self.review_payload(rating=rating))
            self.assertEqual(response.status_code, 400)
            self.assertTrue(response.json()["error"].startswith("Invalid value for rating"))

    def test_unknown_car_is_404(self):
        response = self.client.post("/api/reviews",
                                    json=self.review_payload(carId=str(ObjectId())))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "Car not found"})

    def test_include_unapproved_requires_admin(self):
        self.submit()
        anonymous = self.client.get("/api/reviews", params={"includeUnapproved": "true"})
        self.assertEqual(anonymous.status_code, 401)

        admin = self.client.get("/api/reviews", params={"includeUnapproved": "true"},
                                headers=self.headers)
        self.assertEqual(admin.json()["total"], 1)

    def test_moderation_actions(self):
        review = self.submit()
        url = f"/api/reviews/{review['id']}"

        approved = self.client.patch(url, json={"action": "approve"}, headers=self.headers)
        self.assertTrue(approved.json()["data"]["isApproved"])
        self.assertEqual(self.client.get("/api/reviews").json()["total"], 1)

        featured = self.client.patch(url, json={"action": "toggleFeatured"},
                                     headers=self.headers)
        self.assertTrue(featured.json()["data"]["isFeatured"])
        unfeatured = self.client.patch(url, json={"action": "toggleFeatured"},
                                       headers=self.headers)
        self.assertFalse(unfeatured.json()["data"]["isFeatured"])

        bogus = self.client.patch(url, json={"action": "archive"}, headers=self.headers)
        self.assertEqual(bogus.status_code, 400)

        rejected = self.client.patch(url, json={"action": "reject"}, headers=self.headers)
        self.assertEqual(rejected.status_code, 200)
        self.assertEqual(self.db.reviews.count_documents({}), 0)

    def test_moderation_requires_admin(self):
        review = self.submit()
        response = self.client.patch(f"/api/reviews/{review['id']}", json={"action": "approve"})
        self.assertEqual(response.status_code, 401)

    def test_edit_and_delete(self):
        review = self.submit()
        url = f"/api/reviews/{review['id']}"
        edited = self.client.put(
            url, json=self.review_payload(title="Edited", rating=4), headers=self.headers
        )
        self.assertEqual(edited.json()["data"]["title"], "Edited")

        deleted = self.client.delete(url, headers=self.headers)
        self.assertEqual(deleted.json(),
                         {"success": True, "message": "Review deleted successfully"})
        self.assertEqual(self.client.delete(url, headers=self.headers).status_code, 404)

    def test_stats_count_approved_reviews_only(self):
        for rating in (5, 5, 4):
            review = self.submit(rating=rating)
            self.client.patch(f"/api/reviews/{review['id']}", json={"action": "approve"},
                              headers=self.headers)
        self.submit(rating=1)

        body = self.client.get(f"/api/reviews/stats/{self.car_id}").json()
        self.assertTrue(body["success"])
        self.assertEqual(body["data"]["totalReviews"], 3)
        self.assertEqual(body["data"]["averageRating"], 4.7)
        self.assertEqual(body["data"]["ratingDistribution"],
                         {"1": 0, "2": 0, "3": 0, "4": 1, "5": 2})

    def test_stats_for_unknown_car_are_zero(self):
        body = self.client.get("/api/reviews/stats/not-an-id").json()
        self.assertEqual(body["data"]["totalReviews"], 0)
        self.assertEqual(body["data"]["averageRating"], 0)
