from app.models import UserRole


class TestAuthRoutes:
    def test_register_login_and_me(self, client):
        response = client.post("/auth/register", json={
            "email": "new@example.com", "full_name": "New Player", "password": "secret123",
        })
        assert response.status_code == 201
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["user"]["role"] == "PLAYER"

        response = client.post("/auth/login", json={"email": "new@example.com", "password": "secret123"})
        assert response.status_code == 200
        token = response.json()["access_token"]

        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["email"] == "new@example.com"

    def test_register_duplicate_email(self, client):
        payload = {"email": "dup@example.com", "full_name": "Dup", "password": "secret123"}
        client.post("/auth/register", json=payload)
        response = client.post("/auth/register", json=payload)
        assert response.status_code == 409
        assert response.json()["code"] == "email_in_use"

    def test_login_wrong_password(self, client):
        client.post("/auth/register", json={"email": "a@example.com", "full_name": "A", "password": "secret123"})
        response = client.post("/auth/login", json={"email": "a@example.com", "password": "wrong-one"})
        assert response.status_code == 401
        assert response.json()["code"] == "invalid_credentials"

    def test_me_requires_valid_token(self, client):
        assert client.get("/auth/me").status_code == 401
        response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401

    def test_profile(self, client, player, player_headers):
        response = client.get("/player/profile", headers=player_headers)
        assert response.status_code == 200
        assert response.json()["id"] == player.id
        assert response.json()["role"] == UserRole.PLAYER.value
