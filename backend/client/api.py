import logging
import requests

from backend.core.config import BACKEND_URL

logger = logging.getLogger(__name__)


class ApiError(Exception):
  """A request to the House Planner API failed. message is the server's error text."""

  def __init__(self, message: str, status_code: int = None):
    super().__init__(message)
    self.message = message
    self.status_code = status_code


class ApiClient:
  """
  Thin wrapper over the REST API.
  session is anything with a requests-style request() method, which lets tests
  pass a FastAPI TestClient instead of a live requests.Session.
  """

  def __init__(self, base_url: str = BACKEND_URL, session=None, timeout: float = 30):
    self.base_url = base_url.rstrip("/")
    self.session = session or requests.Session()
    self.timeout = timeout

  def request(self, method: str, endpoint: str, params: dict = None, json: dict = None):
    # Blank filters mean "no filter"
    if params:
      params = {key: value for key, value in params.items() if value not in (None, "")}
    try:
      response = self.session.request(
        method, f"{self.base_url}{endpoint}", params=params or None, json=json, timeout=self.timeout
      )
    except requests.exceptions.RequestException as e:
      logger.error(f"API Error: {method} {endpoint}: {e}")
      raise ApiError(f"Could not reach the API: {e}")

    if response.status_code >= 400:
      try:
        message = response.json().get("error") or "API request failed"
      except ValueError:
        message = "API request failed"
      logger.error(f"API Error: {method} {endpoint} -> {response.status_code}: {message}")
      raise ApiError(message, response.status_code)
    return response.json()

  # --- Items ---
  def list_items(self, **filters):
    return self.request("GET", "/items", params=filters)

  def item_stats(self):
    return self.request("GET", "/items/stats")

  def get_item(self, item_id):
    return self.request("GET", f"/items/{item_id}")

  def create_item(self, data):
    return self.request("POST", "/items", json=data)

  def update_item(self, item_id, data):
    return self.request("PUT", f"/items/{item_id}", json=data)

  def delete_item(self, item_id):
    return self.request("DELETE", f"/items/{item_id}")

  # --- Logistics ---
  def list_logistics(self, **filters):
    return self.request("GET", "/logistics", params=filters)

  def logistics_stats(self):
    return self.request("GET", "/logistics/stats")

  def get_logistics(self, entry_id):
    return self.request("GET", f"/logistics/{entry_id}")

  def create_logistics(self, data):
    return self.request("POST", "/logistics", json=data)

  def update_logistics(self, entry_id, data):
    return self.request("PUT", f"/logistics/{entry_id}", json=data)

  def delete_logistics(self, entry_id):
    return self.request("DELETE", f"/logistics/{entry_id}")

  # --- Rooms ---
  def list_rooms(self):
    return self.request("GET", "/rooms")

  def create_room(self, data):
    return self.request("POST", "/rooms", json=data)

  def update_room(self, room_id, data):
    return self.request("PUT", f"/rooms/{room_id}", json=data)

  def delete_room(self, room_id):
    return self.request("DELETE", f"/rooms/{room_id}")

  # --- Settings & priorities ---
  def get_settings(self):
    return self.request("GET", "/settings")

  def update_setting(self, key, value):
    return self.request("PUT", f"/settings/{key}", json={"value": value})

  def list_priorities(self):
    return self.request("GET", "/priorities")

  def health(self):
    return self.request("GET", "/health")
