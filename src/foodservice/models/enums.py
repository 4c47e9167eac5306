"""Shared enums for models."""

from enum import Enum


class TenantStatus(str, Enum):
    """Tenant account status."""

    ACTIVE = "Active"
    SUSPENDED = "Suspended"
    TRIAL = "Trial"
    CANCELLED = "Cancelled"


class SubscriptionTier(str, Enum):
    BASIC = "Basic"
    STANDARD = "Standard"
    PREMIUM = "Premium"
    ENTERPRISE = "Enterprise"


class MarketSegment(str, Enum):
    """Foodservice market segment of a tenant."""

    HEALTHCARE = "Healthcare"
    K12_SCHOOL = "K-12 School"
    COLLEGE = "College/University"
    BUSINESS = "Business/Industrial"
    CORRECTIONAL = "Correctional"
    MILITARY = "Military"
    LONG_TERM_CARE = "Long-term Care"
    COMMERCIAL = "Commercial"
    OTHER = "Other"


class UserRole(str, Enum):
    """Caller role within a tenant, as asserted by the auth gateway."""

    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"
    VIEWER = "viewer"


class SiteType(str, Enum):
    KITCHEN = "Kitchen"
    DINING_HALL = "Dining Hall"
    SATELLITE = "Satellite"
    COMMISSARY = "Commissary"
    CAFETERIA = "Cafeteria"


class SiteStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    SEASONAL = "Seasonal"


class StationType(str, Enum):
    GRILL = "Grill"
    STEAM_TABLE = "Steam Table"
    COLD_BAR = "Cold Bar"
    SALAD_BAR = "Salad Bar"
    TRAYLINE = "Trayline"
    BEVERAGE = "Beverage"
    DESSERT = "Dessert"
    A_LA_CARTE = "À la Carte"
    GRAB_AND_GO = "Grab-and-Go"


class StationStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    UNDER_MAINTENANCE = "Under Maintenance"


class JobTitle(str, Enum):
    COOK = "Cook"
    PREP_COOK = "Prep Cook"
    SERVER = "Server"
    DISHWASHER = "Dishwasher"
    SUPERVISOR = "Supervisor"
    MANAGER = "Manager"
    DIETITIAN = "Dietitian"
    RECEIVING_CLERK = "Receiving Clerk"
    STOREROOM_CLERK = "Storeroom Clerk"
    TRAY_ASSEMBLER = "Tray Assembler"
    CASHIER = "Cashier"
    UTILITY_WORKER = "Utility Worker"


class EmployeeStatus(str, Enum):
    ACTIVE = "Active"
    ON_LEAVE = "On Leave"
    TERMINATED = "Terminated"


class UnitType(str, Enum):
    WEIGHT = "Weight"
    VOLUME = "Volume"
    COUNT = "Count"
    EACH = "Each"


class StorageType(str, Enum):
    DRY = "Dry"
    REFRIGERATED = "Refrigerated"
    FROZEN = "Frozen"


class DietCategory(str, Enum):
    REGULAR = "Regular"
    THERAPEUTIC = "Therapeutic"
    TEXTURE_MODIFIED = "Texture-Modified"
    ALLERGY = "Allergy"
    RELIGIOUS = "Religious"
    LIFESTYLE = "Lifestyle"


class ActiveStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class IngredientStatus(str, Enum):
    ACTIVE = "Active"
    DISCONTINUED = "Discontinued"
    SEASONAL = "Seasonal"


class VendorType(str, Enum):
    BROADLINE = "Broadline Distributor"
    PRODUCE = "Produce"
    DAIRY = "Dairy"
    MEAT = "Meat"
    BAKERY = "Bakery"
    SEAFOOD = "Seafood"
    SPECIALTY = "Specialty"
    BEVERAGE = "Beverage"
    PAPER = "Paper/Disposables"
    EQUIPMENT = "Equipment"


class VendorStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    SUSPENDED = "Suspended"
    PROSPECTIVE = "Prospective"


class PurchaseOrderStatus(str, Enum):
    DRAFT = "Draft"
    SUBMITTED = "Submitted"
    CONFIRMED = "Confirmed"
    PARTIAL = "Partial"
    RECEIVED = "Received"
    CANCELLED = "Cancelled"


class DinerType(str, Enum):
    PATIENT = "Patient"
    STUDENT = "Student"
    RESIDENT = "Resident"
    STAFF = "Staff"
    VISITOR = "Visitor"


class DinerStatus(str, Enum):
    ACTIVE = "Active"
    DISCHARGED = "Discharged"
    ON_LEAVE = "On Leave"


class TextureModification(str, Enum):
    """Texture requirement for diners with swallowing difficulties."""

    REGULAR = "Regular"
    MECHANICAL_SOFT = "Mechanical Soft"
    PUREED = "Pureed"
    GROUND = "Ground"


class LiquidConsistency(str, Enum):
    REGULAR = "Regular"
    NECTAR = "Thickened-Nectar"
    HONEY = "Thickened-Honey"
    NPO = "NPO"


class FeedingAssistance(str, Enum):
    INDEPENDENT = "Independent"
    SETUP = "Setup"
    FEEDING_ASSIST = "Feeding Assist"
    TUBE_FED = "Tube Fed"


class FreeReducedStatus(str, Enum):
    """School nutrition program eligibility."""

    PAID = "Paid"
    FREE = "Free"
    REDUCED = "Reduced"
