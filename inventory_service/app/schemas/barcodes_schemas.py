from pydantic import BaseModel


class GeneratedBarcode(BaseModel):
    barcode: str
