"""
Test suite for company endpoints.
"""

import pytest


NEW_COMPANY = {
    "handle": "new",
    "name": "New",
    "logoUrl": "http://new.img",
    "description": "DescNew",
    "numEmployees": 10,
}


class TestCompanyCreation:
    """Tests for POST /companies"""

    def test_create_as_admin(self, client, seed, admin_headers):
        response = client.post("/api/v1/companies/", json=NEW_COMPANY, headers=admin_headers)

        assert response.status_code == 201
        assert response.json() == {"company": NEW_COMPANY}

    def test_create_as_non_admin(self, client, seed, user_headers):
        response = client.post("/api/v1/companies/", json=NEW_COMPANY, headers=user_headers)

        assert response.status_code == 401

    def test_create_anon(self, client, seed):
        response = client.post("/api/v1/companies/", json=NEW_COMPANY)

        assert response.status_code == 401

    def test_create_duplicate(self, client, seed, admin_headers):
        response = client.post(
            "/api/v1/companies/",
            json={**NEW_COMPANY, "handle": "c1"},
            headers=admin_headers
        )

        assert response.status_code == 400

    def test_create_missing_fields(self, client, seed, admin_headers):
        response = client.post(
            "/api/v1/companies/",
            json={"handle": "new", "numEmployees": 10},
            headers=admin_headers
        )

        assert response.status_code == 422

    def test_create_negative_employees(self, client, seed, admin_headers):
        response = client.post(
            "/api/v1/companies/",
            json={**NEW_COMPANY, "numEmployees": -1},
            headers=admin_headers
        )

        assert response.status_code == 422


class TestCompanyListing:
    """Tests for GET /companies"""

    def test_list_anon(self, client, seed):
        response = client.get("/api/v1/companies/")

        assert response.status_code == 200
        companies = response.json()["companies"]
        assert [c["handle"] for c in companies] == ["c1", "c2", "c3"]
        assert companies[0] == {
            "handle": "c1",
            "name": "C1",
            "description": "Desc1",
            "numEmployees": 1,
            "logoUrl": "http://c1.img",
        }

    def test_filters(self, client, seed):
        response = client.get(
            "/api/v1/companies/",
            params={"name": "c", "minEmployees": 2, "maxEmployees": 2}
        )

        assert [c["handle"] for c in response.json()["companies"]] == ["c2"]

    @pytest.mark.parametrize("name", ["%", "_1"])
    def test_name_filter_is_literal(self, client, seed, name):
        response = client.get("/api/v1/companies/", params={"name": name})

        assert response.status_code == 200
        assert response.json()["companies"] == []

    def test_min_greater_than_max(self, client, seed):
        response = client.get(
            "/api/v1/companies/",
            params={"minEmployees": 3, "maxEmployees": 1}
        )

        assert response.status_code == 400
        assert "min employees" in response.json()["detail"].lower()

    def test_invalid_filter_value(self, client, seed):
        response = client.get("/api/v1/companies/", params={"minEmployees": "lots"})

        assert response.status_code == 422


class TestCompanyRetrieval:
    """Tests for GET /companies/{handle}"""

    def test_get_with_jobs(self, client, seed):
        response = client.get("/api/v1/companies/c2")

        assert response.status_code == 200
        assert response.json() == {
            "company": {
                "handle": "c2",
                "name": "C2",
                "description": "Desc2",
                "numEmployees": 2,
                "logoUrl": "http://c2.img",
                "jobs": [
                    {
                        "id": seed["jobs"]["j2"]["id"],
                        "title": "j2",
                        "salary": 120000,
                        "equity": "0.1",
                    }
                ],
            }
        }

    def test_get_without_jobs(self, client, seed):
        response = client.get("/api/v1/companies/c3")

        assert response.json()["company"]["jobs"] == []

    def test_get_nonexistent(self, client, seed):
        response = client.get("/api/v1/companies/nope")

        assert response.status_code == 404
        assert "no company" in response.json()["detail"].lower()


class TestCompanyUpdate:
    """Tests for PATCH /companies/{handle}"""

    def test_update_as_admin(self, client, seed, admin_headers):
        response = client.patch(
            "/api/v1/companies/c1",
            json={"name": "C1-new"},
            headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["company"]["name"] == "C1-new"
        assert response.json()["company"]["numEmployees"] == 1

    def test_update_as_non_admin(self, client, seed, user_headers):
        response = client.patch(
            "/api/v1/companies/c1",
            json={"name": "C1-new"},
            headers=user_headers
        )

        assert response.status_code == 401

    def test_update_nonexistent(self, client, seed, admin_headers):
        response = client.patch(
            "/api/v1/companies/nope",
            json={"name": "new nope"},
            headers=admin_headers
        )

        assert response.status_code == 404

    @pytest.mark.parametrize("body", [{"handle": "c1-new"}, {"logoUrl": 12}])
    def test_update_invalid(self, client, seed, admin_headers, body):
        response = client.patch("/api/v1/companies/c1", json=body, headers=admin_headers)

        assert response.status_code == 422

    @pytest.mark.parametrize("field", ["name", "description"])
    def test_update_null_required_field(self, client, seed, admin_headers, field):
        response = client.patch(
            "/api/v1/companies/c1",
            json={field: None},
            headers=admin_headers
        )

        assert response.status_code == 422
        assert client.get("/api/v1/companies/c1").json()["company"][field] is not None

    def test_update_null_optional_field(self, client, seed, admin_headers):
        response = client.patch(
            "/api/v1/companies/c1",
            json={"logoUrl": None},
            headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["company"]["logoUrl"] is None

    def test_update_empty(self, client, seed, admin_headers):
        response = client.patch("/api/v1/companies/c1", json={}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "No data"


class TestCompanyDeletion:
    """Tests for DELETE /companies/{handle}"""

    def test_delete_as_admin(self, client, seed, admin_headers):
        response = client.delete("/api/v1/companies/c1", headers=admin_headers)

        assert response.json() == {"deleted": "c1"}
        assert client.get("/api/v1/companies/c1").status_code == 404

    def test_delete_as_non_admin(self, client, seed, user_headers):
        response = client.delete("/api/v1/companies/c1", headers=user_headers)

        assert response.status_code == 401

    def test_delete_nonexistent(self, client, seed, admin_headers):
        response = client.delete("/api/v1/companies/nope", headers=admin_headers)

        assert response.status_code == 404
