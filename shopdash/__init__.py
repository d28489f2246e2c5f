"""ShopDash: shop management backend with window analytics."""
