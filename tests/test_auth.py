from conftest import make_user
from taskdeck.core.security import verify_token, create_refresh_token


def test_signup_success(client):
    """Test : créer un utilisateur avec succès"""
    response = client.post("/auth/signup", json={
        "email": "signup@example.com",
        "name": "Alice",
        "password": "password123"
    })
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "signup@example.com"
    assert data["name"] == "Alice"
    assert "id" in data
    assert "password_hash" not in data  # Le hash ne doit pas être retourné

def test_signup_duplicate_email(client):
    """Test : impossible de créer 2 users avec le même email"""
    client.post("/auth/signup", json={"email": "dup@example.com", "password": "password123"})
    response = client.post("/auth/signup", json={"email": "dup@example.com", "password": "password123"})
    assert response.status_code == 409
    assert response.json()["detail"] == "Email already in use"

def test_signup_short_password(client):
    response = client.post("/auth/signup", json={"email": "short@example.com", "password": "abc"})
    assert response.status_code == 400

def test_signup_invalid_email(client):
    response = client.post("/auth/signup", json={"email": "not-an-email", "password": "password123"})
    assert response.status_code == 400

def test_signin_success(client):
    """Test : se connecter avec succès, les claims portent le profil"""
    user = make_user("signin@example.com", password="password123", name="Bob")
    response = client.post("/auth/signin", json={
        "email": "signin@example.com",
        "password": "password123"
    })
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"

    payload = verify_token(data["access_token"])
    assert payload["user_id"] == user.id
    assert payload["email"] == "signin@example.com"
    assert payload["name"] == "Bob"
    assert payload["type"] == "access"
    assert verify_token(data["refresh_token"])["type"] == "refresh"

def test_signin_wrong_password(client):
    """Test : impossible de se connecter avec un mauvais password"""
    make_user("wrongpass@example.com", password="correctpassword")
    response = client.post("/auth/signin", json={
        "email": "wrongpass@example.com",
        "password": "wrongpassword"
    })
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"

def test_signin_unknown_email(client):
    response = client.post("/auth/signin", json={"email": "ghost@example.com", "password": "password123"})
    assert response.status_code == 401

def test_signin_account_without_password(client, db):
    """Un compte sans hash (connexion externe) ne peut pas se connecter par password"""
    from taskdeck.models.user import User
    db.add(User(email="oauth@example.com", name="OAuth"))
    db.commit()
    response = client.post("/auth/signin", json={"email": "oauth@example.com", "password": "whatever1"})
    assert response.status_code == 401

def test_refresh_token(client):
    make_user("refresh@example.com")
    tokens = client.post("/auth/signin", json={"email": "refresh@example.com", "password": "password123"}).json()

    response = client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert response.status_code == 200
    data = response.json()
    assert verify_token(data["access_token"])["type"] == "access"
    assert data["refresh_token"] == tokens["refresh_token"]

def test_refresh_rejects_access_token(client):
    make_user("refresh2@example.com")
    tokens = client.post("/auth/signin", json={"email": "refresh2@example.com", "password": "password123"}).json()
    response = client.post("/auth/refresh", json={"refresh_token": tokens["access_token"]})
    assert response.status_code == 401

def test_refresh_token_cannot_call_api(client):
    user = make_user("refresh3@example.com")
    token = create_refresh_token(user.id, user.email)
    response = client.get("/tasks", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401

def test_missing_token(client):
    assert client.get("/tasks").status_code == 401
    assert client.get("/categories").status_code == 401
    assert client.put("/user/profile", json={"name": "x", "email": "x@example.com"}).status_code == 401

def test_invalid_token(client):
    response = client.get("/tasks", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401

def test_orphaned_session(client, headers, db):
    """Session valide mais plus aucun user avec cet email -> 404"""
    from taskdeck.models.user import User
    db.query(User).filter(User.email == "owner@example.com").delete()
    db.commit()
    response = client.get("/tasks", headers=headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "User not found"

def test_session_update_merges_profile(client, headers):
    """Après un changement d'email, /auth/session ré-émet un token à jour"""
    client.put("/user/profile", headers=headers, json={
        "name": "Renamed",
        "email": "renamed@example.com",
        "image": "https://example.com/me.png"
    })

    # l'ancien token porte l'ancien email
    assert client.get("/tasks", headers=headers).status_code == 404

    response = client.post("/auth/session", headers=headers)
    assert response.status_code == 200
    payload = verify_token(response.json()["access_token"])
    assert payload["email"] == "renamed@example.com"
    assert payload["name"] == "Renamed"
    assert payload["image"] == "https://example.com/me.png"

    new_headers = {"Authorization": f"Bearer {response.json()['access_token']}"}
    assert client.get("/tasks", headers=new_headers).status_code == 200

def test_health_z(client):
    """Test : l'endpoint health fonctionne"""
    response = client.get("/health/z")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"

def test_health_db(client):
    response = client.get("/health/db")
    assert response.status_code == 200
    assert response.json()["database"] == "ok"

def test_refresh_uses_current_profile(client):
    """Après un changement d'email, le refresh émet un token avec le nouvel email"""
    make_user("before@example.com")
    tokens = client.post("/auth/signin", json={"email": "before@example.com", "password": "password123"}).json()
    old_headers = {"Authorization": f"Bearer {tokens['access_token']}"}
    client.put("/user/profile", headers=old_headers, json={"name": "After", "email": "after@example.com"})

    response = client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert response.status_code == 200
    payload = verify_token(response.json()["access_token"])
    assert payload["email"] == "after@example.com"
    assert payload["name"] == "After"

    new_headers = {"Authorization": f"Bearer {response.json()['access_token']}"}
    assert client.get("/tasks", headers=new_headers).status_code == 200
