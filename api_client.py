"""HTTP client for the task board API.

One method per REST operation. Every call carries the caller's user id in
the ``x-user-id`` header; any non-2xx answer raises ApiError. There is no
retry and no timeout, so transport errors from requests reach the caller
as they are.
"""
import logging
import os
import threading

import requests

logger = logging.getLogger(__name__)

DEFAULT_API_URL = os.environ.get("TASKBOARD_API_URL", "http://localhost:3000/api")


class ApiError(Exception):
    def __init__(self, status_code, reason):
        super().__init__(f"API Error: {reason}")
        self.status_code = status_code
        self.reason = reason


class TaskApi:
    def __init__(self, identity, base_url=None, session=None):
        self.identity = identity
        self.base_url = (base_url or DEFAULT_API_URL).rstrip("/")
        self._session = session
        self._local = threading.local()

    @property
    def session(self):
        # requests.Session is not thread-safe, so each board worker gets its own
        if self._session is not None:
            return self._session
        if not hasattr(self._local, "session"):
            self._local.session = requests.Session()
        return self._local.session

    def _request(self, method, path, payload=None):
        headers = {
            "Content-Type": "application/json",
            "x-user-id": self.identity.get_user_id(),
        }
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        response = self.session.request(method, url, headers=headers, json=payload)
        if not response.ok:
            raise ApiError(response.status_code, response.reason)
        return response.json()

    def get_tasks(self):
        return self._request("GET", "/tasks")

    def create_task(self, task):
        """task: {id, columnId, content, createdAt}"""
        return self._request("POST", "/tasks", task)

    def update_task(self, task_id, updates):
        """updates: any subset of {columnId, content}"""
        return self._request("PUT", f"/tasks/{task_id}", updates)

    def delete_task(self, task_id):
        return self._request("DELETE", f"/tasks/{task_id}")
