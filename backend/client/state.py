import logging
from typing import Optional

from backend.client.api import ApiClient, ApiError

logger = logging.getLogger(__name__)


class AppState:
  """
  Client-side cache of everything the views show.

  Collections are merged with the record the server returns after each
  mutation. Statistics are never patched locally: after every mutation the
  matching stats endpoint is fetched again before the call returns.
  A failed mutation raises ApiError and leaves the cache as it was.
  """

  def __init__(self, api: Optional[ApiClient] = None):
    self.api = api or ApiClient()
    self.items = []
    self.logistics = []
    self.rooms = []
    self.priorities = []
    self.settings = {}
    self.item_stats = None
    self.logistics_stats = None
    self.item_filters = {}
    self.logistics_filters = {}
    self.error = None

  # --- Loading ---

  def load(self):
    """Initial load of every collection."""
    self.fetch_rooms()
    self.fetch_items()
    self.fetch_logistics()
    self.fetch_item_stats()
    self.fetch_logistics_stats()
    self.fetch_settings()
    self.fetch_priorities()
    return self

  def _fetch(self, label, call, *args, **kwargs):
    try:
      return call(*args, **kwargs)
    except ApiError as e:
      logger.error(f"Error fetching {label}: {e.message}")
      self.error = e.message
      return None

  def fetch_items(self, **filters):
    self.item_filters = filters
    data = self._fetch("items", self.api.list_items, **filters)
    if data is not None:
      self.items = data
    return self.items

  def fetch_item_stats(self):
    data = self._fetch("item stats", self.api.item_stats)
    if data is not None:
      self.item_stats = data
    return self.item_stats

  def fetch_logistics(self, **filters):
    self.logistics_filters = filters
    data = self._fetch("logistics", self.api.list_logistics, **filters)
    if data is not None:
      self.logistics = data
    return self.logistics

  def fetch_logistics_stats(self):
    data = self._fetch("logistics stats", self.api.logistics_stats)
    if data is not None:
      self.logistics_stats = data
    return self.logistics_stats

  def fetch_rooms(self):
    data = self._fetch("rooms", self.api.list_rooms)
    if data is not None:
      self.rooms = data
    return self.rooms

  def fetch_settings(self):
    data = self._fetch("settings", self.api.get_settings)
    if data is not None:
      self.settings = data
    return self.settings

  def fetch_priorities(self):
    data = self._fetch("priorities", self.api.list_priorities)
    if data is not None:
      self.priorities = data
    return self.priorities

  # --- Mutations ---

  def _mutate(self, call, *args):
    try:
      result = call(*args)
    except ApiError as e:
      self.error = e.message
      raise
    self.error = None
    return result

  def create_item(self, data):
    new_item = self._mutate(self.api.create_item, data)
    self.items = [new_item] + self.items
    self.fetch_item_stats()
    return new_item

  def update_item(self, item_id, data):
    updated = self._mutate(self.api.update_item, item_id, data)
    self.items = [updated if item["id"] == item_id else item for item in self.items]
    self.fetch_item_stats()
    return updated

  def delete_item(self, item_id):
    self._mutate(self.api.delete_item, item_id)
    self.items = [item for item in self.items if item["id"] != item_id]
    self.fetch_item_stats()

  def create_logistics(self, data):
    new_entry = self._mutate(self.api.create_logistics, data)
    self.logistics = [new_entry] + self.logistics
    self.fetch_logistics_stats()
    return new_entry

  def update_logistics(self, entry_id, data):
    updated = self._mutate(self.api.update_logistics, entry_id, data)
    self.logistics = [updated if entry["id"] == entry_id else entry for entry in self.logistics]
    self.fetch_logistics_stats()
    return updated

  def delete_logistics(self, entry_id):
    self._mutate(self.api.delete_logistics, entry_id)
    self.logistics = [entry for entry in self.logistics if entry["id"] != entry_id]
    self.fetch_logistics_stats()

  def create_room(self, data):
    new_room = self._mutate(self.api.create_room, data)
    self.rooms = sorted(self.rooms + [new_room], key=lambda room: room["name"].casefold())
    self.fetch_item_stats()
    return new_room

  def update_room(self, room_id, data):
    updated = self._mutate(self.api.update_room, room_id, data)
    rooms = [updated if room["id"] == room_id else room for room in self.rooms]
    self.rooms = sorted(rooms, key=lambda room: room["name"].casefold())
    self.fetch_item_stats()
    return updated

  def delete_room(self, room_id):
    self._mutate(self.api.delete_room, room_id)
    self.rooms = [room for room in self.rooms if room["id"] != room_id]
    # The room's items went with it on the server
    self.fetch_items(**self.item_filters)
    self.fetch_item_stats()

  def update_setting(self, key, value):
    result = self._mutate(self.api.update_setting, key, value)
    self.settings = {**self.settings, key: result["value"]}
    return result
