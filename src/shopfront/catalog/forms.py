"""Catalog forms."""

from decimal import Decimal

from django import forms

from .models import ALLOWED_IMAGE_EXTENSIONS


class ProductForm(forms.Form):
    """Add/edit product form.

    The image is required when adding and optional when editing.
    """

    title = forms.CharField(
        min_length=3,
        max_length=200,
        strip=True,
        error_messages={"min_length": "Title must have at least 3 characters."},
    )
    price = forms.DecimalField(
        min_value=Decimal("0"),
        max_digits=10,
        decimal_places=2,
        error_messages={
            "invalid": "Price must be a number.",
            "max_decimal_places": "Price must have two decimal places.",
        },
    )
    description = forms.CharField(
        min_length=5,
        max_length=200,
        strip=True,
        widget=forms.Textarea(attrs={"rows": 5}),
        error_messages={
            "min_length": "Description must be min 5 characters and max 200 characters.",
            "max_length": "Description must be min 5 characters and max 200 characters.",
        },
    )
    image = forms.FileField(required=False)

    def __init__(self, *args, editing=False, **kwargs):
        super().__init__(*args, **kwargs)
        self.editing = editing
        self.fields["image"].required = not editing

    def clean_image(self):
        image = self.cleaned_data.get("image")
        if not image:
            if not self.editing:
                raise forms.ValidationError("Attached file is not an image.")
            return None
        extension = image.name.rsplit(".", 1)[-1].lower() if "." in image.name else ""
        if extension not in ALLOWED_IMAGE_EXTENSIONS:
            raise forms.ValidationError("Attached file is not an image.")
        return image
