from locust import HttpUser, task, between
import random


class FeedbackUser(HttpUser):
    """
    Mixed load: diners submitting feedback through the public link,
    owners reading their feedback, admins toggling status.
    """
    host = "http://127.0.0.1:8010"
    wait_time = between(0.05, 0.3)

    def on_start(self):
        r = self.client.post("/admin/restaurants", json={"name": f"Load Cafe {random.randint(1, 10_000)}"})
        self.restaurant_id = r.json()["restaurant"]["id"] if r.status_code == 201 else None

    def _submission(self):
        overall = random.randint(1, 5)
        return {
            "restaurantId": self.restaurant_id,
            "foodRating": random.randint(1, 5),
            "staffRating": random.randint(1, 5),
            "ambienceRating": random.randint(1, 5),
            "overallRating": overall,
            "suggestions": random.choice([None, "Great", "Too noisy", "Slow service"]),
        }

    @task(6)
    def submit_feedback(self):
        if not self.restaurant_id:
            return
        # 400 while the restaurant is blocked is expected
        with self.client.post("/feedback/submit", json=self._submission(), catch_response=True) as r:
            if r.status_code in (201, 400):
                r.success()

    @task(3)
    def list_feedback(self):
        if self.restaurant_id:
            self.client.get("/feedback/list", params={"restaurantId": self.restaurant_id})

    @task(1)
    def toggle_status(self):
        if not self.restaurant_id:
            return
        status = random.choice(["active", "active", "blocked"])
        self.client.patch(
            "/admin/restaurants/status",
            json={"restaurantId": self.restaurant_id, "status": status},
        )
