import pytest

@pytest.fixture
def user_id(client):
    response = client.post("/api/users/", json={"first_name": "Lena", "email": "lena@example.com"})
    return response.json()["id"]

def test_create_and_get_profile(client, user_id):
    response = client.post("/api/profiles/", json={
        "user_id": user_id,
        "bio": "Learning Spanish, teaching Python",
        "major": "Computer Science",
        "year": "Junior",
        "github": "https://github.com/lena",
    })
    assert response.status_code == 201
    profile_id = response.json()["id"]

    response = client.get(f"/api/profiles/{profile_id}")
    assert response.status_code == 200
    data = response.json()
    assert data["user_id"] == user_id
    assert data["major"] == "Computer Science"
    assert data["linkedin"] is None

def test_create_profile_unknown_user(client):
    response = client.post("/api/profiles/", json={"user_id": 9999, "bio": "ghost"})
    assert response.status_code == 404
    assert response.json()["detail"] == "User not found"

def test_create_second_profile_for_user(client, user_id):
    client.post("/api/profiles/", json={"user_id": user_id})
    response = client.post("/api/profiles/", json={"user_id": user_id})
    assert response.status_code == 409

def test_update_profile_replaces_fields(client, user_id):
    profile_id = client.post("/api/profiles/", json={
        "user_id": user_id,
        "bio": "Old bio",
        "major": "Biology",
    }).json()["id"]

    response = client.put(f"/api/profiles/{profile_id}", json={"bio": "New bio", "location": "Austin"})
    assert response.status_code == 200
    data = response.json()
    assert data["bio"] == "New bio"
    assert data["location"] == "Austin"
    assert data["major"] is None

def test_list_profiles(client, user_id):
    client.post("/api/profiles/", json={"user_id": user_id, "bio": "Hi"})
    response = client.get("/api/profiles/")
    assert response.status_code == 200
    assert len(response.json()) == 1

def test_missing_profile(client):
    assert client.get("/api/profiles/9999").status_code == 404
    assert client.put("/api/profiles/9999", json={"bio": "x"}).status_code == 404
