from repositories.base import JsonRepository


class OrderRepository(JsonRepository):
    collection = "orders"
    id_prefix = "order_"
