import json


def test_signup_and_login(client, data_dir):
	response = client.post("/api/auth/signup", json={"username": "asha", "password": "secret1"})
	assert response.status_code == 200
	assert response.json()["success"] is True
	assert response.json()["message"] == "Signup successful! You can now log in."

	response = client.post("/api/auth/login", json={"username": "asha", "password": "secret1"})
	body = response.json()
	assert body["success"] is True
	assert body["username"] == "asha"

	users = json.loads((data_dir / "users.json").read_text(encoding="utf-8"))
	assert [u["username"] for u in users] == ["asha"]
	assert users[0]["id"].isdigit()

	# performance data is initialized for the new user
	performance = json.loads((data_dir / "user_performance.json").read_text(encoding="utf-8"))
	assert performance["asha"] == {"soft_skills_history": [], "aptitude_history": [], "interview_history": []}


def test_signup_duplicate(client):
	client.post("/api/auth/signup", json={"username": "asha", "password": "secret1"})
	response = client.post("/api/auth/signup", json={"username": "asha", "password": "another1"})
	assert response.json() == {"success": False, "message": "Username already exists.", "username": None}


def test_signup_validation_messages(client):
	response = client.post("/api/auth/signup", json={"username": "ab", "password": "123"})
	body = response.json()
	assert body["success"] is False
	assert body["message"] == (
		"Username must be at least 3 characters long., Password must be at least 6 characters long."
	)


def test_login_wrong_password(client):
	client.post("/api/auth/signup", json={"username": "asha", "password": "secret1"})
	response = client.post("/api/auth/login", json={"username": "asha", "password": "wrong-one"})
	assert response.json()["success"] is False
	assert response.json()["message"] == "Invalid username or password."


def test_login_unknown_user(client):
	response = client.post("/api/auth/login", json={"username": "ghost", "password": "secret1"})
	assert response.json()["message"] == "Invalid username or password."


def test_api_key_guard(client, monkeypatch):
	from elevix.config import settings

	monkeypatch.setattr(settings, "api_key", "k-123")
	response = client.post("/api/auth/login", json={"username": "asha", "password": "secret1"})
	assert response.status_code == 401

	response = client.post(
		"/api/auth/login",
		json={"username": "asha", "password": "secret1"},
		headers={"Authorization": "Bearer k-123"},
	)
	assert response.status_code == 200


def test_cors_preflight_from_dev_frontend(client):
	response = client.options(
		"/api/auth/login",
		headers={
			"Origin": "http://localhost:3000",
			"Access-Control-Request-Method": "POST",
			"Access-Control-Request-Headers": "Content-Type,Authorization",
		},
	)
	assert response.status_code == 200
	assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_malformed_users_file_reads_as_empty(client, data_dir):
	(data_dir / "users.json").write_text('{"asha": "secret1"}', encoding="utf-8")
	response = client.post("/api/auth/login", json={"username": "asha", "password": "secret1"})
	assert response.json()["message"] == "Invalid username or password."


def test_saved_users_can_log_in(client):
	import anyio

	from elevix.schemas import User
	from elevix.services.user_store import user_store

	anyio.run(user_store.save_users, [User(id="1", username="ravi", password="hunter22")])
	response = client.post("/api/auth/login", json={"username": "ravi", "password": "hunter22"})
	assert response.json()["success"] is True


def test_get_users_lists_signed_up_users(client):
	import anyio

	from elevix.services.user_store import user_store

	client.post("/api/auth/signup", json={"username": "asha", "password": "secret1"})
	client.post("/api/auth/signup", json={"username": "ravi", "password": "secret2"})
	users = anyio.run(user_store.get_users)
	assert [u.username for u in users] == ["asha", "ravi"]
	assert anyio.run(user_store.find, "ravi").password == "secret2"
