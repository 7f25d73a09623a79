"""
Dilovod SDK - High-level client with nice ergonomics.

This layer maps each public operation onto one remote action.
Built on top of the core APIClient.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from dilovod_cli.core.client import DEFAULT_TIMEOUT, APIClient
from dilovod_cli.core.types import ObjectQuery


class DilovodClient:
    """
    High-level Dilovod API client.

    Objects are plain dicts exactly as the API returns them.

    Example:
        client = DilovodClient("YOUR_API_KEY")

        goods = client.get_objects("catalogs.goods", fields=["name", "price"], order_by="name ASC", limit=10)
        partner = client.save_object({"type": "catalogs.persons", "name": "New Client", "is_buyer": True})
        order = client.get_object(partner["id"])

    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the Dilovod client.

        Args:
            api_key: Dilovod API key (or DILOVOD_API_KEY env var)
            base_url: API base URL (or DILOVOD_BASE_URL env var)
            timeout: Request timeout in seconds

        """
        self._client = APIClient(api_key=api_key, base_url=base_url, timeout=timeout)

    @property
    def api_client(self) -> APIClient:
        """The underlying core client."""
        return self._client

    def get_object(self, object_id: str) -> dict[str, Any]:
        """
        Get a single object (document, catalog entry, ...) by ID.

        Raises:
            APIError: If the request fails or the object is not found

        """
        return self._client.request("getObject", {"id": object_id})

    def get_objects(
        self,
        object_type: str,
        filter: Mapping[str, Any] | None = None,
        fields: Sequence[str] | None = None,
        order_by: str = "",
        limit: int = 0,
    ) -> list[dict[str, Any]]:
        """
        List objects of a type.

        Args:
            object_type: Object type (e.g., catalogs.goods, documents.sale_order)
            filter: Field/value pairs to match (empty matches everything)
            fields: Field names to return (empty returns all fields)
            order_by: Sort field and direction (e.g., "name ASC", "date DESC")
            limit: Maximum number of objects (0 means no limit)

        Returns:
            Objects matching the criteria

        """
        query = ObjectQuery.build(object_type, filter=filter, fields=fields, order_by=order_by, limit=limit)
        return self._client.request("getObjects", query.to_params())

    def save_object(self, object_data: dict[str, Any]) -> dict[str, Any]:
        """
        Create or update an object.

        ``object_data`` must carry a ``type`` field; the API validates it.
        Returns the save result, typically holding the object's ``id``.
        """
        return self._client.request("saveObject", object_data)

    def sale_order_create(self, order_data: dict[str, Any]) -> dict[str, Any]:
        """Create a sale order (order from buyer)."""
        return self._client.request("saleOrderCreate", order_data)
