# Masters
from assetflow.models.masters.department_models import Department
from assetflow.models.masters.vendor_models import Vendor

# Users and auth
from assetflow.models.users.user_models import User

# Assets
from assetflow.models.assets.asset_models import Asset, AssetItem
from assetflow.models.assets.upload_models import Upload
