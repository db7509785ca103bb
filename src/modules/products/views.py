"""Product API views.

Thin HTTP adapters around ``ProductService``: they parse the request into
DTOs, pick the record to save (fresh for create, looked up for update) and
translate the outcome into a response.

- ``SaveFailure`` / parse errors → its status + ``{"error": message}``.
- A ``category`` that does not resolve → 400 ``{"error": "Category not found"}``.
- ``ProductNotFound`` → 404.
- Anything raised while writing → logged, 500.
"""

from __future__ import annotations

from typing import Tuple

import structlog
from asgiref.sync import async_to_sync
from django.http import HttpResponse
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.products.dtos import PhotoUpload, ProductFields, ProductFiles, SaveFailure
from modules.products.exceptions import ProductNotFound
from modules.products.models import Product
from modules.products.photos import UploadedPhotoReader
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService

logger = structlog.get_logger(__name__)

PRODUCT_NOT_FOUND = {"error": "Product not found"}
CATEGORY_NOT_FOUND = {"error": "Category not found"}
PUBLIC_ACTIONS = {"retrieve", "by_slug", "photo"}


def _parse_error_message(exc: PydanticValidationError) -> str:
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    return f"Invalid {field}: {first['msg']}" if field else first["msg"]


def parse_product_request(
    request: Request,
) -> Tuple[ProductFields, ProductFiles, UploadedPhotoReader]:
    """Split a request into parsed fields, files and a reader for the upload.

    Raises:
        pydantic.ValidationError: if a supplied value has the wrong shape.
    """
    fields = ProductFields.from_form(request.data)

    upload = request.FILES.get("photo")
    if upload is None:
        return fields, ProductFiles(), UploadedPhotoReader({})

    if hasattr(upload, "temporary_file_path"):
        path = upload.temporary_file_path()
    else:
        path = upload.name
    photo = PhotoUpload(
        path=path,
        content_type=upload.content_type or "application/octet-stream",
        size=upload.size,
    )
    return fields, ProductFiles(photo=photo), UploadedPhotoReader({path: upload})


class ProductViewSet(GenericViewSet):
    """Create, update and delete products; read single products and photos.

    Writes require a staff user.  Reads are public.
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    def get_permissions(self):
        if self.action in PUBLIC_ACTIONS:
            return [AllowAny()]
        return [IsAdminUser()]

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        return self._save(
            request,
            Product(),
            success_status=status.HTTP_201_CREATED,
            success_message="Product Created Successfully",
            error_message="Error in creating product",
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/products/{pk}/"""
        try:
            product = self._service.get_product(pk)
        except ProductNotFound:
            return Response(PRODUCT_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)

        return self._save(
            request,
            product,
            success_status=status.HTTP_200_OK,
            success_message="Product Updated Successfully",
            error_message="Error in updating product",
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/"""
        try:
            self._service.delete_product(pk)
        except ProductNotFound:
            return Response(PRODUCT_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except Exception:
            logger.exception("product.delete_failed", product_id=str(pk))
            return Response(
                {"success": False, "error": "Error in deleting product"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response(
            {"success": True, "message": "Product Deleted Successfully"},
            status=status.HTTP_200_OK,
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        try:
            product = self._service.get_product(pk)
        except ProductNotFound:
            return Response(PRODUCT_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(ProductSerializer(product).data)

    @action(detail=False, methods=["get"], url_path=r"slug/(?P<slug>[-\w]+)")
    def by_slug(self, request: Request, slug: str | None = None) -> Response:
        """GET /api/v1/products/slug/{slug}/"""
        try:
            product = self._service.get_product_by_slug(slug)
        except ProductNotFound:
            return Response(PRODUCT_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(ProductSerializer(product).data)

    @action(detail=True, methods=["get"])
    def photo(self, request: Request, pk: str | None = None):
        """GET /api/v1/products/{pk}/photo/ (raw bytes)"""
        try:
            product = self._service.get_product(pk)
        except ProductNotFound:
            return Response(PRODUCT_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        if not product.has_photo:
            return Response(
                {"error": "Photo not found"}, status=status.HTTP_404_NOT_FOUND
            )
        return HttpResponse(
            bytes(product.photo),
            content_type=product.photo_content_type or "application/octet-stream",
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _save(
        self,
        request: Request,
        product: Product,
        *,
        success_status: int,
        success_message: str,
        error_message: str,
    ) -> Response:
        try:
            fields, files, reader = parse_product_request(request)
        except PydanticValidationError as exc:
            return Response(
                {"error": _parse_error_message(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        if fields.category is not None and not self._service.category_exists(
            fields.category
        ):
            return Response(CATEGORY_NOT_FOUND, status=status.HTTP_400_BAD_REQUEST)

        try:
            result = async_to_sync(self._service.save_product)(
                product, fields, files, reader
            )
        except Exception:
            logger.exception(
                "product.save_failed",
                product_id=str(product.pk) if product.pk else None,
            )
            return Response(
                {"success": False, "error": error_message},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        if isinstance(result, SaveFailure):
            return Response({"error": result.error}, status=result.status)

        return Response(
            {
                "success": True,
                "message": success_message,
                "product": ProductSerializer(product).data,
            },
            status=success_status,
        )
