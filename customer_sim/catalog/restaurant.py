"""Default restaurant setup and the dishes a new customer asks for."""

from customer_sim.schemas.customer_schema import RestaurantInfo

DEFAULT_RESTAURANT = RestaurantInfo(
    available_dishes=("Phở Bò", "Bún Bò Huế", "Cơm Tấm", "Bánh Mì", "Gỏi Cuốn"),
    sold_out_dishes=("Chả Cá Lã Vọng",),
    empty_tables=(1, 2, 3, 4, 5, 6),
    opening_hours="7:00 - 22:00",
)

DEFAULT_WANTS: tuple[str, ...] = ("Phở Bò", "Bún Bò Huế")
DEFAULT_FALLBACKS: tuple[str, ...] = ("Cơm Tấm", "Bánh Mì")
DEFAULT_INFO_QUESTIONS: tuple[str, ...] = ("hours", "menuScope")
