from .atmosphere import (
    WHITE as WHITE,
    estimate_atmospheric_light as estimate_atmospheric_light,
)
from .dark_channel import dark_channel as dark_channel
from .grid import as_pixel_grid as as_pixel_grid
from .radiance import recover_radiance as recover_radiance
from .transmission import (
    transmission_map as transmission_map,
    transmission_to_rgb as transmission_to_rgb,
)
