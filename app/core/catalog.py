"""Default business field catalog.

The on-road price components an ingested dealer price list must provide.
Order matters: it is the priority order of the catalog-wide exact passes.
"""

from app.core.models import BusinessField


DEFAULT_CATALOG: tuple[BusinessField, ...] = (
    BusinessField(key="exShowroomPrice", label="Ex Showroom price (excl Incentives/ Subsidy)"),
    BusinessField(key="emps", label="EMPS"),
    BusinessField(key="stateSubsidy", label="State Subsidy (Claimed after delivery)"),
    BusinessField(key="postGstDiscount", label="Post GST Discount"),
    BusinessField(key="p1Total", label="P1 Total (Excl Insurance and RTO but incl subsidys)"),
    BusinessField(key="insurance", label="Insurance"),
    BusinessField(key="municipalTax", label="Municipal tax (% tax on Ex showroom excl. subsidy) [130]"),
    BusinessField(key="rtoRoadSafety", label="RTO - Road safety tax / CESS."),
    BusinessField(key="smartCardFee", label="Smart card fee & RTO registration"),
    BusinessField(key="postalCharges", label="Postal Charges."),
    BusinessField(key="serviceCharge", label="Service Charge and Penality"),
    BusinessField(key="roadTax", label="Road tax (% tax on Ex showroom excl. subsidy) [130]"),
    BusinessField(key="effectiveOnRoadCore", label="Effective on road Price to customer - Core"),
    BusinessField(key="effectiveOnRoadPro", label="Effective on road Price to customer - Pro"),
)
