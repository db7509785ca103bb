from __future__ import annotations

import mimetypes
from decimal import Decimal
from pathlib import Path
from typing import Optional

from asgiref.sync import async_to_sync
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from modules.products.dtos import PhotoUpload, ProductFields, ProductFiles, SaveFailure
from modules.products.models import Category, Product
from modules.products.photos import FileSystemPhotoReader
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService
from modules.products.slugs import derive_slug

CATALOG = [
    ("Electronics", "Monitor 27\"", "IPS panel, 144Hz", Decimal("1299.90"), 12, True),
    ("Electronics", "Mechanical Keyboard", "Hot-swappable switches", Decimal("399.90"), 40, True),
    ("Electronics", "Wireless Mouse", "2.4GHz receiver included", Decimal("249.90"), 75, True),
    ("Furniture", "Office Desk", "Solid oak top", Decimal("899.00"), 5, False),
    ("Furniture", "Ergonomic Chair", "Adjustable lumbar support", Decimal("1499.00"), 8, False),
    ("Books", "The Pragmatic Programmer", "20th anniversary edition", Decimal("49.90"), 30, True),
]

PHOTO_SUFFIXES = (".png", ".jpg", ".jpeg", ".webp")


class Command(BaseCommand):
    help = "Seed the catalog with categories, products and an admin user."

    def add_arguments(self, parser):
        parser.add_argument(
            "--photos-dir",
            type=Path,
            default=None,
            help="Directory with photos named after product slugs (e.g. office-desk.jpg).",
        )

    def handle(self, *args, **options):
        photos_dir: Optional[Path] = options["photos_dir"]
        if photos_dir is not None and not photos_dir.is_dir():
            raise CommandError(f"{photos_dir} is not a directory")

        self.stdout.write("Seeding catalog...")
        users_created = self._seed_admin()
        categories = self._seed_categories()
        products_created = self._seed_products(categories, photos_dir)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"categories={len(categories)}, "
                f"products={products_created}"
            )
        )

    def _seed_admin(self) -> int:
        User = get_user_model()
        if User.objects.filter(username="admin").exists():
            return 0
        User.objects.create_superuser("admin", password="admin123")
        return 1

    def _seed_categories(self) -> dict[str, Category]:
        categories: dict[str, Category] = {}
        for name in sorted({row[0] for row in CATALOG}):
            category, _ = Category.objects.get_or_create(
                name=name, defaults={"slug": derive_slug(name)}
            )
            categories[name] = category
        return categories

    def _seed_products(
        self, categories: dict[str, Category], photos_dir: Optional[Path]
    ) -> int:
        service = ProductService(repository=ProductDjangoRepository())
        reader = FileSystemPhotoReader()
        created = 0
        for category_name, name, description, price, quantity, shipping in CATALOG:
            slug = derive_slug(name)
            if Product.objects.filter(slug=slug).exists():
                continue

            fields = ProductFields(
                name=name,
                description=description,
                price=price,
                category=categories[category_name].id,
                quantity=quantity,
                shipping=shipping,
            )
            files = ProductFiles(photo=self._find_photo(photos_dir, slug))
            result = async_to_sync(service.save_product)(Product(), fields, files, reader)
            if isinstance(result, SaveFailure):
                self.stderr.write(f"Skipped {name}: {result.error}")
                continue
            created += 1
        return created

    @staticmethod
    def _find_photo(photos_dir: Optional[Path], slug: str) -> Optional[PhotoUpload]:
        if photos_dir is None:
            return None
        for suffix in PHOTO_SUFFIXES:
            candidate = photos_dir / f"{slug}{suffix}"
            if candidate.is_file():
                content_type, _ = mimetypes.guess_type(candidate.name)
                return PhotoUpload(
                    path=str(candidate),
                    content_type=content_type or "application/octet-stream",
                    size=candidate.stat().st_size,
                )
        return None
