"""
Well-known system property ids.

The capture service addresses field and page system properties either by
name or by these ids. Requests may use either form; the helpers below map
one to the other.
"""

from typing import Dict, Optional

# Field system properties
FIELD_PROPERTY_IDS: Dict[str, str] = {
    "Value": "0B8889DC16EA4F32AFFED1A48E49A720",
    "Width": "57491C9612194E639DBF85ECD794ECB2",
}

# Page system properties
PAGE_PROPERTY_IDS: Dict[str, str] = {
    "Annotations": "4F8BF8ABF72844AFB601D79F01FCD172",
    "Barcodes": "C7091EE3F1764D9B830A2DCCDDE3BC66",
    "ContentClassificationResults": "392BB1F05CA64276BA89B3D7F69C11A7",
    "IsFront": "01FBA6D5EE40411FA435644376D8C316",
    "HorizontalResolution": "05D0FE805F6A4D53A7538816084C2A9E",
    "InstanceId": "F938266C4CC640FC8C289D1FE732CD3E",
    "PageIndex": "57958466808145E0BD47603B0606B0E4",
    "ImageId": "D576DDE6FE3649CEB32DFD28845487C3",
    "ImprintedText": "C669842EA20A47F0A0F6D48EB0F3FBEE",
    "LayoutClassificationResults": "0E28C018E3294BE0A89789078EB0DE23",
    "MimeType": "EDDA201B9E9C46BD8121F24B2E72A1CE",
    "IsRejected": "CD0F9328210B4DE4B9B8A306B20BF8FC",
    "RejectionNote": "56840E9FF63F47BD83EF726E9B989A0A",
    "RightToLeft": "A1EA890B8FF042BC8FD7970F0DFD2E6F",
    "RotationType": "D4E9F5534C484840A56CC20F0730AA92",
    "SheetId": "9290D05F7D0F4F2786DA3DE0BBCBF891",
    "Height": "0D5434EA13E643D19E84881202A74271",
    "Width": "57491C9612194E639DBF85ECD794ECB2",
    "SourceFileData": "E60063B1FD624F9D989023916E21BEE8",
    "SplitPage": "1187BF2F5A2E4ADEB6ACD483296ED2DE",
    "TdsResults": "0EBAEBB3DC3F468694D2A49E623D63C2",
    "TextLines": "7816A234B4234181B93F9E134B79C6EE",
    "ThumbnailId": "260A3F338640445FB35F41A778C54518",
    "VerticalResolution": "D101F18AF1FC4E848E0F08B8384066DC",
    "VrsProcessed": "9F36442A45814F48A5A140D05D7072C4",
    "Words": "D81F2877289147E4915D9168F2E53020",
}

ALL_PAGE_PROPERTY_NAMES = list(PAGE_PROPERTY_IDS)


def _name_for(id_or_name: str, table: Dict[str, str]) -> Optional[str]:
    if id_or_name in table:
        return id_or_name
    token = id_or_name.upper()
    for name, prop_id in table.items():
        if prop_id == token:
            return name
    return None


def page_property_name(id_or_name: str) -> Optional[str]:
    """Name of a page system property given its name or id, None if unknown."""
    return _name_for(id_or_name, PAGE_PROPERTY_IDS)


def field_property_name(id_or_name: str) -> str:
    """Name of a field system property given its name or id; unknown tokens pass through."""
    return _name_for(id_or_name, FIELD_PROPERTY_IDS) or id_or_name
