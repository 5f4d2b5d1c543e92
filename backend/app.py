import streamlit as st
import pandas as pd

from backend.client.api import ApiClient, ApiError
from backend.client.forms import choices_with, index_of, item_payload, logistics_payload
from backend.client.state import AppState
from backend.core.config import BACKEND_URL, configure_logging
from backend.models.models import ITEM_STATUSES, COMPLETION_STATUSES
from backend.services.listing import (
  ITEM_SORT_KEYS, calendar_events, filter_items, filter_logistics, group_items, is_upcoming, parse_date, sort_records,
)

configure_logging()
st.set_page_config(page_title="House Planner", layout="wide")


def money(value) -> str:
  return f"${float(value or 0):,.2f}"


def percent(part, whole) -> float:
  return (float(part) / float(whole)) * 100 if whole and float(whole) > 0 else 0.0


def get_state() -> AppState:
  if "app_state" not in st.session_state:
    st.session_state.app_state = AppState(ApiClient(BACKEND_URL)).load()
  return st.session_state.app_state


def run_mutation(action, success: str):
  try:
    action()
    st.success(success)
    st.rerun()
  except ApiError as e:
    st.error(f"❌ {e.message}")


state = get_state()

st.title("🏠 House Planner")
if state.error:
  st.warning(state.error)

tab_dash, tab_items, tab_rooms, tab_logistics, tab_budget, tab_calendar = st.tabs([
  "📊 Dashboard", "🛋️ Items", "🚪 Rooms", "🔌 Logistics", "💰 Budget", "📅 Calendar",
])

# ==============================================================================
# DASHBOARD
# ==============================================================================
with tab_dash:
  item_stats, logistics_stats = state.item_stats, state.logistics_stats
  if not item_stats or not logistics_stats:
    st.info("Loading dashboard...")
  else:
    overall = item_stats["overall"]
    total_budget = float(state.settings.get("total_budget") or overall["total_budget"] or 0)
    total_spent = overall["total_spent"] + logistics_stats["overall"]["total_cost"]

    col1, col2, col3 = st.columns(3)
    col1.metric("Total Spent", money(total_spent),
                f"{percent(total_spent, total_budget):.0f}% of {money(total_budget)}" if total_budget else "No budget set")
    col2.metric("Items Completed", f"{overall['completed_items']} / {overall['total_items']}")
    col3.metric("Services Completed",
                f"{logistics_stats['overall']['completed_services']} / {logistics_stats['overall']['total_services']}")

    st.subheader("Progress by Room")
    for room in item_stats["byRoom"]:
      done = percent(room["completed_items"], room["total_items"])
      st.write(f"**{room['room']}** · {room['completed_items']}/{room['total_items']} items · "
               f"{money(room['spent'])} / {money(room['budget'])}")
      st.progress(min(int(done), 100))

    st.subheader("Coming up this week")
    upcoming = [e for e in calendar_events(state.items, state.logistics) if is_upcoming(e["date"])]
    if upcoming:
      st.dataframe(pd.DataFrame(upcoming)[["date", "type", "title"]], hide_index=True, use_container_width=True)
    else:
      st.caption("Nothing scheduled in the next 7 days.")

# ==============================================================================
# ITEMS
# ==============================================================================
with tab_items:
  room_names = {room["id"]: room["name"] for room in state.rooms}
  priority_names = [p["name"] for p in state.priorities]

  categories = sorted({item["category"] for item in state.items if item.get("category")})

  col1, col2, col3, col4, col5, col6 = st.columns(6)
  search = col1.text_input("Search", placeholder="name, description or vendor")
  room_filter = col2.selectbox("Room", [""] + list(room_names), format_func=lambda rid: room_names.get(rid, "All rooms"))
  category_filter = col3.selectbox("Category", [""] + categories, format_func=lambda c: c or "All categories")
  status_filter = col4.selectbox("Status", [""] + ITEM_STATUSES, format_func=lambda s: s or "All statuses")
  priority_filter = col5.selectbox("Priority", [""] + priority_names, format_func=lambda p: p or "All priorities")
  sort_by = col6.selectbox("Sort by", ITEM_SORT_KEYS)
  view_mode = st.radio("View", ["vendor", "room", "list"], horizontal=True,
                       format_func={"vendor": "By Vendor", "room": "By Room", "list": "List"}.get)

  shown = filter_items(state.items, room_id=room_filter, category=category_filter, status=status_filter,
                       priority=priority_filter, search=search)
  shown = sort_records(shown, sort_by, state.priorities)

  def item_form(key, item=None):
    """Add form, or edit form when item is given. Returns the request body once submitted."""
    item = item or {}
    room_ids = list(room_names)
    priorities = choices_with(priority_names, item.get("priority"))
    with st.form(key, clear_on_submit=not item):
      c1, c2, c3 = st.columns(3)
      values = {
        "name": c1.text_input("Name", item.get("name", ""), key=f"{key}-name"),
        "room_id": c2.selectbox("Room", room_ids, index=index_of(room_ids, item.get("room_id")),
                                format_func=room_names.get, key=f"{key}-room"),
        "category": c3.text_input("Category", item.get("category") or "", key=f"{key}-category"),
        "cost": c1.number_input("Cost", min_value=0.0, value=float(item.get("cost", 0)), step=10.0,
                                key=f"{key}-cost"),
        "budget_allocated": c2.number_input("Budget allocated", min_value=0.0,
                                            value=float(item.get("budget_allocated", 0)), step=10.0,
                                            key=f"{key}-budget"),
        "vendor": c3.text_input("Vendor", item.get("vendor") or "", key=f"{key}-vendor"),
        "status": c1.selectbox("Status", ITEM_STATUSES, index=index_of(ITEM_STATUSES, item.get("status")),
                               key=f"{key}-status"),
        "priority": c2.selectbox("Priority", priorities, index=index_of(priorities, item.get("priority")),
                                 key=f"{key}-priority"),
        "delivery_date": c3.date_input("Delivery date", value=parse_date(item.get("delivery_date")),
                                       key=f"{key}-delivery"),
        "dimensions": c1.text_input("Dimensions", item.get("dimensions") or "", key=f"{key}-dimensions"),
        "description": c2.text_input("Description", item.get("description") or "", key=f"{key}-description"),
        "notes": st.text_area("Notes", item.get("notes") or "", key=f"{key}-notes"),
      }
      if st.form_submit_button("Save changes" if item else "Save item", type="primary"):
        return item_payload(values)
    return None

  def render_item(item):
    with st.container(border=True):
      left, right = st.columns([4, 1])
      left.markdown(f"**{item['name']}** · {item.get('room') or 'Unassigned'} · {item['status']}")
      left.caption(f"{item.get('category') or ''} · {item.get('vendor') or 'No Vendor'} · "
                   f"{item.get('priority') or ''} · delivery {item.get('delivery_date') or '-'}")
      right.write(money(item["cost"]))
      toggle_to = "Needed" if item["status"] == "Completed" else "Completed"
      if right.button("✔️" if toggle_to == "Completed" else "↩️", key=f"toggle-{item['id']}"):
        run_mutation(lambda: state.update_item(item["id"], {"status": toggle_to}), f"{item['name']} marked {toggle_to}")
      if right.button("🗑️", key=f"delete-item-{item['id']}"):
        run_mutation(lambda: state.delete_item(item["id"]), f"Deleted {item['name']}")
      editing = right.toggle("Edit", key=f"editing-item-{item['id']}")
      if editing:
        changes = item_form(f"edit-item-{item['id']}", item)
        if changes:
          run_mutation(lambda: state.update_item(item["id"], changes), f"Saved {changes['name'] or item['name']}")

  if not shown:
    st.info("No items found. Try adjusting your filters or add a new item.")
  elif view_mode == "list":
    for item in shown:
      render_item(item)
  else:
    for label, members in group_items(shown, view_mode, state.rooms):
      with st.expander(f"{label} ({len(members)})", expanded=bool(members)):
        for item in members:
          render_item(item)

  st.subheader("➕ Add Item")
  new_item = item_form("add-item")
  if new_item:
    run_mutation(lambda: state.create_item(new_item), f"Added {new_item['name']}")

# ==============================================================================
# ROOMS
# ==============================================================================
with tab_rooms:
  stats_by_room = {r["room_id"]: r for r in (state.item_stats or {}).get("byRoom", [])}
  for room in state.rooms:
    room_stats = stats_by_room.get(room["id"], {})
    with st.expander(f"{room['name']} · {room_stats.get('total_items', 0)} items"):
      st.write(f"Spent {money(room_stats.get('spent'))} of {money(room_stats.get('budget'))}")
      with st.form(f"room-{room['id']}"):
        new_name = st.text_input("Name", room["name"])
        new_budget = st.number_input("Budget", min_value=0.0, value=float(room["budget"]), step=100.0)
        new_description = st.text_input("Description", room.get("description") or "")
        save, delete = st.columns(2)
        if save.form_submit_button("Save"):
          run_mutation(lambda: state.update_room(room["id"], {
            "name": new_name, "budget": new_budget, "description": new_description,
          }), f"Saved {new_name}")
        if delete.form_submit_button("Delete room and its items"):
          run_mutation(lambda: state.delete_room(room["id"]), f"Deleted {room['name']}")

  st.subheader("➕ Add Room")
  with st.form("add-room", clear_on_submit=True):
    name = st.text_input("Room name")
    budget = st.number_input("Budget", min_value=0.0, step=100.0)
    description = st.text_input("Description")
    if st.form_submit_button("Create room", type="primary"):
      run_mutation(lambda: state.create_room({"name": name, "budget": budget, "description": description}),
                   f"Created {name}")

# ==============================================================================
# LOGISTICS
# ==============================================================================
with tab_logistics:
  service_types = sorted({entry["service_type"] for entry in state.logistics})
  col1, col2 = st.columns(2)
  service_filter = col1.selectbox("Service", [""] + service_types, format_func=lambda s: s or "All services")
  completion_filter = col2.selectbox("Status", [""] + COMPLETION_STATUSES, format_func=lambda s: s or "All statuses",
                                     key="logistics-status")

  def logistics_form(key, entry=None):
    """Add form, or edit form when entry is given. Returns the request body once submitted."""
    entry = entry or {}
    with st.form(key, clear_on_submit=not entry):
      c1, c2 = st.columns(2)
      values = {
        "service_type": c1.text_input("Service type", entry.get("service_type", ""), key=f"{key}-service"),
        "provider_name": c2.text_input("Provider", entry.get("provider_name") or "", key=f"{key}-provider"),
        "application_date": c1.date_input("Application date", value=parse_date(entry.get("application_date")),
                                          key=f"{key}-applied"),
        "scheduled_date": c2.date_input("Scheduled date", value=parse_date(entry.get("scheduled_date")),
                                        key=f"{key}-scheduled"),
        "completion_status": c1.selectbox("Status", COMPLETION_STATUSES,
                                          index=index_of(COMPLETION_STATUSES, entry.get("completion_status")),
                                          key=f"{key}-status"),
        "priority": c2.text_input("Priority", entry.get("priority") or "Normal", key=f"{key}-priority"),
        "account_number": c1.text_input("Account number", entry.get("account_number") or "", key=f"{key}-account"),
        "contact_info": c2.text_input("Contact", entry.get("contact_info") or "", key=f"{key}-contact"),
        "cost": c1.number_input("Cost", min_value=0.0, value=float(entry.get("cost", 0)), step=10.0,
                                key=f"{key}-cost"),
        "notes": st.text_area("Notes", entry.get("notes") or "", key=f"{key}-notes"),
      }
      if st.form_submit_button("Save changes" if entry else "Save service", type="primary"):
        return logistics_payload(values)
    return None

  entries = filter_logistics(state.logistics, service_type=service_filter, completion_status=completion_filter)
  if not entries:
    st.info("No logistics entries found.")
  for entry in entries:
    with st.container(border=True):
      left, right = st.columns([4, 1])
      left.markdown(f"**{entry['service_type']}** · {entry.get('provider_name') or ''} · {entry['completion_status']}")
      left.caption(f"{entry.get('priority') or ''} · scheduled {entry.get('scheduled_date') or '-'} · "
                   f"{entry.get('notes') or ''}")
      right.write(money(entry["cost"]))
      next_status = {"Pending": "In Progress", "In Progress": "Completed", "Completed": "Pending"}[entry["completion_status"]]
      if right.button(f"→ {next_status}", key=f"advance-{entry['id']}"):
        run_mutation(lambda: state.update_logistics(entry["id"], {"completion_status": next_status}),
                     f"{entry['service_type']} is now {next_status}")
      if right.button("🗑️", key=f"delete-logistics-{entry['id']}"):
        run_mutation(lambda: state.delete_logistics(entry["id"]), f"Deleted {entry['service_type']}")
      editing = right.toggle("Edit", key=f"editing-logistics-{entry['id']}")
      if editing:
        changes = logistics_form(f"edit-logistics-{entry['id']}", entry)
        if changes:
          run_mutation(lambda: state.update_logistics(entry["id"], changes), f"Saved {entry['service_type']}")

  st.subheader("➕ Add Service")
  new_entry = logistics_form("add-logistics")
  if new_entry:
    run_mutation(lambda: state.create_logistics(new_entry), f"Added {new_entry['service_type']}")

# ==============================================================================
# BUDGET
# ==============================================================================
with tab_budget:
  if not state.item_stats or not state.logistics_stats:
    st.info("Loading budget data...")
  else:
    total_budget = float(state.settings.get("total_budget") or 0)
    items_spent = state.item_stats["overall"]["total_spent"]
    logistics_spent = state.logistics_stats["overall"]["total_cost"]
    total_spent = items_spent + logistics_spent
    remaining = total_budget - total_spent

    with st.form("total-budget"):
      new_total = st.number_input("Total budget", min_value=0.0, value=total_budget, step=500.0)
      if st.form_submit_button("Update budget"):
        run_mutation(lambda: state.update_setting("total_budget", new_total), "Budget updated")

    col1, col2, col3 = st.columns(3)
    col1.metric("Total Budget", money(total_budget))
    col2.metric("Total Spent", money(total_spent), f"Items {money(items_spent)} · Logistics {money(logistics_spent)}",
                delta_color="off")
    col3.metric("Remaining", money(remaining))
    st.progress(min(int(percent(total_spent, total_budget)), 100),
                text=f"{percent(total_spent, total_budget):.0f}% of budget used")
    if total_budget > 0 and total_spent > total_budget:
      st.error(f"⚠️ Warning: You have exceeded your budget by {money(abs(remaining))}")

    st.subheader("By Room")
    if state.item_stats["byRoom"]:
      st.dataframe(pd.DataFrame(state.item_stats["byRoom"])[["room", "total_items", "spent", "budget"]],
                   hide_index=True, use_container_width=True)
    st.subheader("By Priority")
    st.dataframe(pd.DataFrame(state.item_stats["byPriority"]), hide_index=True, use_container_width=True)

# ==============================================================================
# CALENDAR
# ==============================================================================
with tab_calendar:
  events = calendar_events(state.items, state.logistics)
  if not events:
    st.info("No deliveries or appointments scheduled.")
  for event in events:
    icon = "🚚" if event["type"] == "delivery" else "🔧"
    detail = event.get("room") if event["type"] == "delivery" else event.get("provider")
    st.markdown(f"{icon} **{event['date']}** · {event['title']} · {detail or ''}")
