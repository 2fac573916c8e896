from spa_api.repositories.record_store import InMemoryRecordStore


class TestStats:
    def test_admin_gets_roster_for_current_week(self, client_as):
        response = client_as("a1", "admin").get("/api/v1/settlements/stats")
        assert response.status_code == 200
        data = response.json()

        assert data["period_start"] == "2024-01-07"
        assert data["period_end"] == "2024-01-13"
        assert [s["name"] for s in data["settlements"]] == ["Ana", "Bea", "Carla"]
        assert data["settlements"][0]["net_worker_payout"] == 50000
        assert data["totals"] == {"total_revenue": 200000, "spa_share": 100000, "total_loans": 110000}
        assert data["diagnostics"] == []

    def test_admin_explicit_range(self, client_as):
        response = client_as("a1", "admin").get(
            "/api/v1/settlements/stats", params={"start_date": "2024-01-01", "end_date": "2024-01-06"}
        )
        assert response.status_code == 200
        bea = response.json()["settlements"][1]
        assert bea["gross_revenue"] == 80000
        assert bea["total_loans"] == 0

    def test_all_time(self, client_as):
        response = client_as("a1", "admin").get("/api/v1/settlements/stats", params={"all_time": True})
        data = response.json()
        assert data["period_start"] is None
        assert data["totals"]["total_revenue"] == 280000
        assert data["totals"]["total_loans"] == 115000

    def test_worker_sees_only_themselves(self, client_as):
        response = client_as("w2", "worker").get("/api/v1/settlements/stats")
        assert response.status_code == 200
        settlements = response.json()["settlements"]
        assert len(settlements) == 1
        assert settlements[0]["worker_id"] == "w2"
        assert settlements[0]["net_worker_payout"] == -60000

    def test_reversed_range_is_bad_request(self, client_as):
        response = client_as().get(
            "/api/v1/settlements/stats", params={"start_date": "2024-02-01", "end_date": "2024-01-01"}
        )
        assert response.status_code == 400

    def test_bad_record_reported_in_roster(self, client_as, workers, make_appointment):
        store = InMemoryRecordStore(
            workers=workers,
            appointments=[make_appointment("w1", 10000), make_appointment("w1", "oops")],
        )
        data = client_as(store=store).get("/api/v1/settlements/stats", params={"all_time": True}).json()
        assert data["settlements"][0]["gross_revenue"] == 10000
        assert len(data["diagnostics"]) == 1
        assert data["diagnostics"][0]["kind"] == "appointment"

    def test_bad_record_fails_single_worker_query(self, client_as, workers, make_appointment):
        store = InMemoryRecordStore(workers=workers, appointments=[make_appointment("w1", "oops")])
        response = client_as("w1", "worker", store=store).get("/api/v1/settlements/stats")
        assert response.status_code == 422
        assert response.json()["record_id"] == store.appointments[0]["id"]


class TestWorkerEndpoints:
    def test_me(self, client_as):
        response = client_as("w1", "worker").get("/api/v1/settlements/me")
        assert response.status_code == 200
        data = response.json()
        assert data["gross_revenue"] == 140000
        assert data["total_loans"] == 20000
        assert data["net_worker_payout"] == 50000

    def test_admin_is_not_a_worker(self, client_as):
        assert client_as("a1", "admin").get("/api/v1/settlements/me").status_code == 404

    def test_admin_reads_one_worker_lifetime(self, client_as):
        response = client_as().get("/api/v1/settlements/workers/w1")
        assert response.status_code == 200
        assert response.json()["total_loans"] == 25000

    def test_unknown_worker_is_not_found(self, client_as):
        assert client_as().get("/api/v1/settlements/workers/w9").status_code == 404

    def test_worker_cannot_read_others(self, client_as):
        assert client_as("w1", "worker").get("/api/v1/settlements/workers/w2").status_code == 403


class TestFinancials:
    def test_daily_defaults_to_today(self, client_as):
        response = client_as().get("/api/v1/financials/daily")
        assert response.status_code == 200
        data = response.json()
        assert data["date"] == "2024-01-10"
        assert data["gross_sales"] == 100000
        assert data["net_cash"] == 80000

    def test_daily_for_given_day(self, client_as):
        data = client_as().get("/api/v1/financials/daily", params={"date": "2024-01-08"}).json()
        assert data["cash_sales"] == 100000
        assert data["loans_today"] == 0

    def test_weekly_defaults_to_current_week(self, client_as):
        data = client_as().get("/api/v1/financials/weekly").json()
        assert data["period_start"] == "2024-01-07"
        assert data["transfer_sales"] == 40000
        assert data["net_income"] == 90000

    def test_admin_only(self, client_as):
        assert client_as("w1", "worker").get("/api/v1/financials/daily").status_code == 403


class TestHistory:
    def test_monthly(self, client_as):
        data = client_as().get("/api/v1/history/monthly").json()
        assert [e["month"] for e in data["entries"]] == ["2024-01"]
        january = data["entries"][0]
        assert january["gross_revenue"] == 280000
        assert january["total_loans"] == 115000
        assert january["net_worker_pay"] == 25000

    def test_admin_only(self, client_as):
        assert client_as("w1", "worker").get("/api/v1/history/monthly").status_code == 403
