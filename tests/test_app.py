def test_health(client):
     response = client.get("/health")

     assert response.status_code == 200
     assert response.json() == {"status": "ok"}


def test_db_health(client):
     response = client.get("/db-health")

     assert response.status_code == 200
     assert response.json()["database"] == "connected"


def test_unknown_route(client, auth_headers):
     response = client.get("/api/owner/rent/nothing-here", headers=auth_headers)

     assert response.status_code == 404
     assert response.json() == {"message": "Route not found"}
