"""Tour package schemas."""

# Fields overwritten by PUT /packages/{id}; anything else in the body is ignored
PACKAGE_UPDATE_FIELDS = (
    "tour_name",
    "image",
    "duration",
    "price",
    "departure_date",
    "departure_location",
    "destination",
    "package_details",
    "guide_contact_no",
)

FEATURED_PACKAGE_LIMIT = 6
