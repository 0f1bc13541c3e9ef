CROP_IMAGE_PROMPT = (
    "A vibrant, high-quality photograph of a healthy {crop_name} plant in a "
    "flourishing field, under a clear sunny sky. Realistic photo."
)
