"""Management command to seed demo products for Shopfront."""

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.files.base import ContentFile
from django.core.management.base import BaseCommand

from shopfront.catalog.models import Product


User = get_user_model()

# 1x1 transparent PNG
PLACEHOLDER_PNG = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000001e221bc330000000049454e44ae426082"
)

PRODUCTS = [
    {
        "title": "A Book",
        "price": Decimal("12.99"),
        "description": "A classic paperback, well thumbed and ready to read.",
    },
    {
        "title": "Red Mug",
        "price": Decimal("8.50"),
        "description": "Ceramic mug that holds a generous cup of coffee.",
    },
    {
        "title": "Canvas Tote",
        "price": Decimal("15.00"),
        "description": "Sturdy cotton tote bag for groceries and books.",
    },
    {
        "title": "Desk Lamp",
        "price": Decimal("34.95"),
        "description": "Adjustable LED desk lamp with three brightness levels.",
    },
    {
        "title": "Notebook",
        "price": Decimal("4.25"),
        "description": "Dot-grid notebook with 120 pages.",
    },
]


class Command(BaseCommand):
    help = "Create a demo owner account and sample products"

    def add_arguments(self, parser):
        parser.add_argument(
            "--owner",
            default="owner@shopfront.local",
            help="Email of the user who will own the products",
        )
        parser.add_argument(
            "--password",
            default="owner123",
            help="Password for the owner if it has to be created",
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Delete and recreate products that already exist",
        )

    def handle(self, *args, **options):
        owner = User.objects.filter(email=options["owner"]).first()
        if owner is None:
            owner = User.objects.create_user(email=options["owner"], password=options["password"])
            self.stdout.write(self.style.SUCCESS(f"Created owner: {owner.email}"))

        self.stdout.write("\nCreating products...")
        for data in PRODUCTS:
            existing = Product.objects.filter(owner=owner, title=data["title"]).first()
            if existing:
                if options["force"]:
                    existing.image.delete(save=False)
                    existing.delete()
                    self.stdout.write(f"  Deleted existing product: {data['title']}")
                else:
                    self.stdout.write(f"  Skipping existing product: {data['title']}")
                    continue

            product = Product(owner=owner, **data)
            slug = data["title"].lower().replace(" ", "-")
            product.image.save(f"{slug}.png", ContentFile(PLACEHOLDER_PNG), save=False)
            product.save()
            self.stdout.write(self.style.SUCCESS(f"  Created: {data['title']}"))

        self.stdout.write(self.style.SUCCESS("\nDone."))
