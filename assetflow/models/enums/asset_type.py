# assetflow/models/enums/asset_type.py
import enum

class AssetType(str, enum.Enum):
    capital = "capital"
    revenue = "revenue"
