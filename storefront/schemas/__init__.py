# Package exports - these allow cleaner imports like:
# from storefront.schemas import ProductCreate, CategoryChanges
from storefront.schemas.product import Variant, ProductCreate, ProductUpdate, ProductResponse, ProductListResponse
from storefront.schemas.category import CategoryResponse, CategoryChanges
from storefront.schemas.testimonial import TestimonialCreate, TestimonialUpdate
from storefront.schemas.enquiry import EnquiryCreate, NotificationRequest
from storefront.schemas.auth import LoginRequest, TokenResponse
