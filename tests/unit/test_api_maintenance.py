"""Test maintenance request endpoints."""

import pytest
from fastapi import status


@pytest.mark.unit
class TestFileRequest:
    """POST /v1/maintenance"""

    def test_admin_files_for_any_room(self, client, admin_headers, store):
        response = client.post(
            "/v1/maintenance", json={"roomId": 7, "description": "Leak"}, headers=admin_headers
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["roomId"] == 7
        assert data["status"] == "Reported"
        assert data["priority"] == "Medium"
        assert data["assignedTo"] == ""
        assert "reportedDate" in data
        assert store.audit.entries()[0].user == "Admin"

    def test_tenant_files_for_own_room(self, client, tenant_headers, store):
        response = client.post(
            "/v1/maintenance", json={"roomId": 3, "description": "Heater broken"}, headers=tenant_headers
        )

        assert response.status_code == status.HTTP_201_CREATED
        entry = store.audit.entries()[0]
        assert entry.user == "Tenant"
        assert entry.details == 'New request for Room 3: "Heater broken"'

    def test_tenant_cannot_file_for_other_room(self, client, tenant_headers):
        response = client.post(
            "/v1/maintenance", json={"roomId": 4, "description": "Not mine"}, headers=tenant_headers
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_room_out_of_range(self, client, admin_headers):
        response = client.post(
            "/v1/maintenance", json={"roomId": 11, "description": "Leak"}, headers=admin_headers
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["detail"] == "Room 11 does not exist"


@pytest.mark.unit
class TestListRequests:
    """GET /v1/maintenance"""

    def test_tenant_sees_own_room_only(self, client, admin_headers, tenant_headers):
        client.post("/v1/maintenance", json={"roomId": 3, "description": "Mine"}, headers=admin_headers)
        client.post("/v1/maintenance", json={"roomId": 5, "description": "Other"}, headers=admin_headers)

        tenant_view = client.get("/v1/maintenance", headers=tenant_headers).json()
        admin_view = client.get("/v1/maintenance", headers=admin_headers).json()

        assert [r["description"] for r in tenant_view] == ["Mine"]
        assert [r["description"] for r in admin_view] == ["Other", "Mine"]


@pytest.mark.unit
class TestUpdateRequest:
    """PATCH /v1/maintenance/{request_id}"""

    def test_partial_update(self, client, admin_headers, store):
        request_id = client.post(
            "/v1/maintenance", json={"roomId": 2, "description": "Leak"}, headers=admin_headers
        ).json()["id"]

        response = client.patch(
            f"/v1/maintenance/{request_id}",
            json={"status": "In Progress", "assignedTo": "Mike"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        request = client.get("/v1/maintenance", headers=admin_headers).json()[0]
        assert request["status"] == "In Progress"
        assert request["assignedTo"] == "Mike"
        assert request["priority"] == "Medium"
        assert store.audit.entries()[0].details == (
            "Request for Room 2 updated: status to 'In Progress', assignedTo to 'Mike'."
        )

    def test_unknown_request(self, client, admin_headers):
        response = client.patch(
            "/v1/maintenance/req-missing", json={"status": "Completed"}, headers=admin_headers
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Maintenance request not found: req-missing"

    def test_unknown_field_rejected(self, client, admin_headers):
        request_id = client.post(
            "/v1/maintenance", json={"roomId": 2, "description": "Leak"}, headers=admin_headers
        ).json()["id"]

        response = client.patch(
            f"/v1/maintenance/{request_id}", json={"roomId": 9}, headers=admin_headers
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_invalid_status_rejected(self, client, admin_headers):
        response = client.patch(
            "/v1/maintenance/req-any", json={"status": "Done"}, headers=admin_headers
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_tenant_cannot_update(self, client, tenant_headers):
        response = client.patch(
            "/v1/maintenance/req-any", json={"status": "Completed"}, headers=tenant_headers
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
