from typing import Optional

from pydantic import BaseModel


class DashboardSummary(BaseModel):
    totalProducts: int
    lowStockItems: int


class SalesReport(BaseModel):
    totalSales: float
    totalItemsSold: int
    totalTransactions: int


class StockRow(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[int] = None
    sold: int
    status: str
