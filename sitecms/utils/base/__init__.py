from sitecms.utils.base.enums import BaseEnum, MergePolicy, Role
