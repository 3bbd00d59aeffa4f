"""
Contract tests for the HTTP API.
"""

from worldaway.services import generate_sample_csv
from worldaway.settings import settings

from conftest import SAMPLE_RECORD, STRONG_RECORD


class TestRootEndpoints:
    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "operational"

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestPredictionEndpoints:
    def test_predict_returns_classification(self, client):
        response = client.post("/api/v1/predict/", json=SAMPLE_RECORD)

        assert response.status_code == 200
        data = response.json()
        assert data["result"]["prediction"] == "False Positive"
        assert abs(data["result"]["confidence"] - 0.7054829) < 1e-6
        assert set(data["result"]["class_probabilities"]) == {"Confirmed Exoplanet", "Candidate", "False Positive"}
        assert data["result"]["feature_importance"][0] == {"feature": "Snr", "importance": 0.28}
        assert data["prediction_id"]

    def test_predict_increments_counter(self, client):
        before = client.get("/api/v1/model/stats").json()["total_predictions"]
        client.post("/api/v1/predict/", json=SAMPLE_RECORD)
        client.post("/api/v1/predict/", json=STRONG_RECORD)
        after = client.get("/api/v1/model/stats").json()["total_predictions"]

        assert after == before + 2

    def test_out_of_range_fields_are_rejected(self, client):
        before = client.get("/api/v1/model/stats").json()["total_predictions"]
        payload = {**SAMPLE_RECORD, "snr": 0, "stellar_temp": 12000}

        response = client.post("/api/v1/predict/", json=payload)

        assert response.status_code == 422
        errors = response.json()["detail"]["errors"]
        assert errors == {
            "snr": "Must be between 0 and 100",
            "stellar_temp": "Must be between 2000 and 10000 K",
        }
        assert client.get("/api/v1/model/stats").json()["total_predictions"] == before

    def test_missing_field_is_rejected(self, client):
        payload = {k: v for k, v in SAMPLE_RECORD.items() if k != "depth"}
        response = client.post("/api/v1/predict/", json=payload)

        assert response.status_code == 422
        assert response.json()["detail"]["errors"] == {"depth": "Must be a number"}

    def test_non_numeric_fields_share_the_error_map(self, client):
        before = client.get("/api/v1/model/stats").json()["total_predictions"]
        payload = {**SAMPLE_RECORD, "snr": "abc", "orbital_period": None, "depth": 2}

        response = client.post("/api/v1/predict/", json=payload)

        assert response.status_code == 422
        assert response.json()["detail"]["errors"] == {
            "orbital_period": "Must be a number",
            "snr": "Must be a number",
            "depth": "Must be between 0 and 1",
        }
        assert client.get("/api/v1/model/stats").json()["total_predictions"] == before

    def test_stored_prediction_can_be_fetched(self, client):
        created = client.post("/api/v1/predict/", json=STRONG_RECORD).json()

        response = client.get(f"/api/v1/predict/{created['prediction_id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["result"] == created["result"]
        assert data["features"] == created["features"]

    def test_unknown_prediction_is_404(self, client):
        response = client.get("/api/v1/predict/does-not-exist")
        assert response.status_code == 404

    def test_history_lists_recent_predictions(self, client):
        created = client.post("/api/v1/predict/", json=SAMPLE_RECORD).json()

        response = client.get("/api/v1/predict/history")

        assert response.status_code == 200
        ids = [p["prediction_id"] for p in response.json()]
        assert created["prediction_id"] in ids


class TestBatchEndpoints:
    def _upload(self, client, text, filename="candidates.csv"):
        return client.post(
            "/api/v1/batch/process-csv",
            files={"file": (filename, text.encode("utf-8"), "text/csv")}
        )

    def test_sample_csv_download(self, client):
        response = client.get("/api/v1/batch/sample-csv")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "attachment" in response.headers["content-disposition"]
        assert response.text == generate_sample_csv()

    def test_process_csv(self, client):
        before = client.get("/api/v1/model/stats").json()["total_predictions"]

        response = self._upload(client, generate_sample_csv())

        assert response.status_code == 200
        data = response.json()
        assert len(data["results"]) == 8
        assert data["summary"]["total"] == 8
        assert data["summary"]["rows_skipped"] == 0
        assert data["filename"] == "candidates.csv"
        assert data["batch_job_id"]
        assert client.get("/api/v1/model/stats").json()["total_predictions"] == before + 8

    def test_process_csv_reports_skipped_rows(self, client):
        text = generate_sample_csv().replace("12.5", "abc", 1)

        response = self._upload(client, text)

        assert response.status_code == 200
        data = response.json()
        assert len(data["results"]) == 7
        assert data["summary"]["rows_skipped"] == 1
        assert data["skipped_rows"][0]["row_index"] == 1

    def test_missing_column_is_400(self, client):
        text = "orbital_period,transit_duration,planetary_radius,stellar_temp,snr\n1,2,3,4000,5"

        response = self._upload(client, text)

        assert response.status_code == 400
        assert "depth" in response.json()["detail"]

    def test_no_valid_rows_is_400(self, client):
        text = "orbital_period,transit_duration,planetary_radius,stellar_temp,snr,depth\na,b,c,d,e,f"

        response = self._upload(client, text)

        assert response.status_code == 400
        assert "No valid data rows" in response.json()["detail"]

    def test_non_csv_file_is_400(self, client):
        response = self._upload(client, generate_sample_csv(), filename="candidates.txt")
        assert response.status_code == 400

    def test_oversized_upload_is_400(self, client, monkeypatch):
        monkeypatch.setattr(settings, "max_upload_size", 20)

        response = self._upload(client, generate_sample_csv())

        assert response.status_code == 400
        assert "maximum upload size of 20 bytes" in response.json()["detail"]

    def test_upload_at_the_size_limit_is_accepted(self, client, monkeypatch):
        text = generate_sample_csv()
        monkeypatch.setattr(settings, "max_upload_size", len(text.encode("utf-8")))

        response = self._upload(client, text)

        assert response.status_code == 200
        assert len(response.json()["results"]) == 8

    def test_process_records(self, client):
        response = client.post(
            "/api/v1/batch/process",
            json={"records": [SAMPLE_RECORD, STRONG_RECORD]}
        )

        assert response.status_code == 200
        data = response.json()
        assert [r["row_index"] for r in data["results"]] == [1, 2]
        assert data["summary"]["confirmed"] == 1
        assert data["summary"]["false_positive"] == 1

    def test_empty_records_is_400(self, client):
        response = client.post("/api/v1/batch/process", json={"records": []})
        assert response.status_code == 400

    def test_stored_batch_and_export(self, client):
        created = client.post(
            "/api/v1/batch/process",
            json={"records": [SAMPLE_RECORD, STRONG_RECORD]}
        ).json()
        batch_job_id = created["batch_job_id"]

        stored = client.get(f"/api/v1/batch/{batch_job_id}")
        assert stored.status_code == 200
        assert stored.json()["results"] == created["results"]
        assert stored.json()["summary"] == created["summary"]

        exported = client.get(f"/api/v1/batch/{batch_job_id}/export")
        assert exported.status_code == 200
        assert "exoplanet_predictions_" in exported.headers["content-disposition"]
        lines = exported.text.split("\n")
        assert lines[0].startswith("Index,Prediction,Confidence")
        assert lines[1] == "1,False Positive,70.55%,15.234,2.45,1.12,5778,12.5,0.0023"

    def test_unknown_batch_is_404(self, client):
        assert client.get("/api/v1/batch/missing").status_code == 404
        assert client.get("/api/v1/batch/missing/export").status_code == 404


class TestModelEndpoints:
    def test_stats(self, client):
        response = client.get("/api/v1/model/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["accuracy"] == 0.92
        assert data["f1"] == 0.89
        assert "last_updated" in data

    def test_feature_importance(self, client):
        response = client.get("/api/v1/model/feature-importance")

        assert response.status_code == 200
        features = response.json()["features"]
        assert [f["feature"] for f in features][:2] == ["Snr", "Depth"]

    def test_distribution(self, client):
        client.post("/api/v1/predict/", json=SAMPLE_RECORD)

        response = client.get("/api/v1/model/distribution")

        assert response.status_code == 200
        data = response.json()
        assert data["total_stored"] >= 1
        assert data["distribution"]["False Positive"] >= 1
