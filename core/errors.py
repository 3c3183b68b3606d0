"""
Common Error Constants

Centralized error messages returned in ``{"error": ...}`` response bodies.
"""

# Auth errors
ERROR_UNAUTHORIZED = "Unauthorized"

# Store errors
ERROR_STORE_NOT_FOUND = "Store not found"
ERROR_INVALID_STORE = "Invalid store"
ERROR_STORE_REQUIRED = "Store is required"
ERROR_STORE_SLUG_REQUIRED = "Store slug required"

# Order errors
ERROR_ORDER_NOT_FOUND = "Order not found"
ERROR_ORDER_STATUS_REQUIRED = "Order ID and fulfillment status are required"
ERROR_ORDER_ID_REQUIRED = "Order ID is required"
ERROR_INVALID_FULFILLMENT_STATUS = "Invalid fulfillment status"
ERROR_STATUS_UPDATE_FAILED = "Failed to update order status"
ERROR_TRACKING_UPDATE_FAILED = "Failed to update tracking information"

# Product / cart errors
ERROR_PRODUCT_NOT_FOUND = "Product not found"
ERROR_NO_PRODUCTS_FOUND = "No products found"
ERROR_EMPTY_CART = "No items in cart"
ERROR_INVALID_QUANTITY = "Quantity must be a positive integer"

# Contact / request errors
ERROR_MISSING_CONTACT_FIELDS = "Please fill in all required fields"
ERROR_MESSAGE_SEND_FAILED = "Failed to send message. Please try again."
ERROR_PRODUCT_NAME_REQUIRED = "Product name is required"
ERROR_REQUEST_SUBMIT_FAILED = "Failed to submit. Please try again."
ERROR_REQUEST_FIELDS_REQUIRED = "Missing requestId or status"
ERROR_INVALID_REQUEST_STATUS = "Invalid status"
ERROR_REQUEST_UPDATE_FAILED = "Failed to update"
ERROR_REQUEST_FETCH_FAILED = "Failed to fetch requests"

# Inventory / sales errors
ERROR_MISSING_REQUIRED_FIELDS = "Missing required fields"
ERROR_INVALID_PURCHASE_PRICE = "Purchase price must be a positive number"
ERROR_INVALID_SALE_PRICE = "Sale price must be a positive number"
ERROR_QUANTITY_NOT_POSITIVE = "Quantity must be a positive number"
ERROR_ITEM_ID_REQUIRED = "Item ID is required"
ERROR_ITEM_NOT_FOUND = "Item not found"
ERROR_ITEMS_FETCH_FAILED = "Failed to fetch items"
ERROR_ITEM_CREATE_FAILED = "Failed to create item"
ERROR_ITEM_DELETE_FAILED = "Failed to delete item"
ERROR_SALE_ID_REQUIRED = "Sale ID is required"
ERROR_SALE_NOT_FOUND = "Sale not found"
ERROR_SALES_FETCH_FAILED = "Failed to fetch sales"
ERROR_SALE_CREATE_FAILED = "Failed to create sale"
ERROR_SALE_DELETE_FAILED = "Failed to delete sale"

# Visit errors
ERROR_TOO_MANY_REQUESTS = "Too many requests"
ERROR_VISIT_RECORD_FAILED = "Failed to record visit"

# Generic errors
ERROR_INVALID_REQUEST = "Invalid request"
ERROR_INTERNAL = "Internal server error"
ERROR_NOT_FOUND = "Not found"
