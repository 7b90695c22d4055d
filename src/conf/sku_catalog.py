"""
Built-in SKU catalog.
=====================
Maps the storefront's human-readable variant selections to warehouse SKUs.

Each product lists the option names that form its variant key (in key
order) and the SKU for every known key. Keys join option values with "|".
Override with a YAML file via SKU_CATALOG_PATH.
"""

VARIANT_KEY_SEPARATOR = "|"

DEFAULT_SKU_CATALOG: dict[str, dict] = {
    "Max Comfort Insoles": {
        "key_options": ["Profile", "Arch Support", "Size"],
        "skus": {
            "Low Profile|Medium Arch|S": "MCI-LP-MA-S",
            "Low Profile|Medium Arch|M": "MCI-LP-MA-M",
            "Low Profile|Medium Arch|L": "MCI-LP-MA-L",
            "Low Profile|Medium Arch|XL": "MCI-LP-MA-XL",
            "Low Profile|High Arch|S": "MCI-LP-HA-S",
            "Low Profile|High Arch|M": "MCI-LP-HA-M",
            "Low Profile|High Arch|L": "MCI-LP-HA-L",
            "Low Profile|High Arch|XL": "MCI-LP-HA-XL",
            "High Profile|Medium Arch|S": "MCI-HP-MA-S",
            "High Profile|Medium Arch|M": "MCI-HP-MA-M",
            "High Profile|Medium Arch|L": "MCI-HP-MA-L",
            "High Profile|Medium Arch|XL": "MCI-HP-MA-XL",
            "High Profile|High Arch|S": "MCI-HP-HA-S",
            "High Profile|High Arch|M": "MCI-HP-HA-M",
            "High Profile|High Arch|L": "MCI-HP-HA-L",
            "High Profile|High Arch|XL": "MCI-HP-HA-XL",
        },
    },
    "NonSlip 'FoamLock' Performance Insoles": {
        "key_options": ["Profile", "Arch Support", "Size"],
        "skus": {
            "Low Profile|Medium Arch|S": "NSFL-LP-MA-S",
            "Low Profile|Medium Arch|M": "NSFL-LP-MA-M",
            "Low Profile|Medium Arch|L": "NSFL-LP-MA-L",
            "Low Profile|Medium Arch|XL": "NSFL-LP-MA-XL",
            "Low Profile|High Arch|S": "NSFL-LP-HA-S",
            "Low Profile|High Arch|M": "NSFL-LP-HA-M",
            "Low Profile|High Arch|L": "NSFL-LP-HA-L",
            "Low Profile|High Arch|XL": "NSFL-LP-HA-XL",
            "High Profile|Medium Arch|S": "NSFL-HP-MA-S",
            "High Profile|Medium Arch|M": "NSFL-HP-MA-M",
            "High Profile|Medium Arch|L": "NSFL-HP-MA-L",
            "High Profile|Medium Arch|XL": "NSFL-HP-MA-XL",
            "High Profile|High Arch|S": "NSFL-HP-HA-S",
            "High Profile|High Arch|M": "NSFL-HP-HA-M",
            "High Profile|High Arch|L": "NSFL-HP-HA-L",
            "High Profile|High Arch|XL": "NSFL-HP-HA-XL",
        },
    },
    "Fleks® East Beach Slides": {
        "key_options": ["Color", "Size"],
        "skus": {
            "Black|7": "FLX-EBS-BLK-07",
            "Black|8": "FLX-EBS-BLK-08",
            "Black|9": "FLX-EBS-BLK-09",
            "Black|10": "FLX-EBS-BLK-10",
            "Black|11": "FLX-EBS-BLK-11",
            "Black|12": "FLX-EBS-BLK-12",
            "Sand|7": "FLX-EBS-SND-07",
            "Sand|8": "FLX-EBS-SND-08",
            "Sand|9": "FLX-EBS-SND-09",
            "Sand|10": "FLX-EBS-SND-10",
            "Sand|11": "FLX-EBS-SND-11",
            "Sand|12": "FLX-EBS-SND-12",
            "Ocean Blue|7": "FLX-EBS-OBL-07",
            "Ocean Blue|8": "FLX-EBS-OBL-08",
            "Ocean Blue|9": "FLX-EBS-OBL-09",
            "Ocean Blue|10": "FLX-EBS-OBL-10",
            "Ocean Blue|11": "FLX-EBS-OBL-11",
            "Ocean Blue|12": "FLX-EBS-OBL-12",
        },
    },
    "NonSlip Carbon Elite Insole": {
        "key_options": ["Size"],
        "skus": {
            "S": "NSCE-S",
            "M": "NSCE-M",
            "L": "NSCE-L",
            "XL": "NSCE-XL",
        },
    },
}
