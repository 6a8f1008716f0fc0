from drive_attendance.clients.credentials import GOOGLE_SCOPES, load_credentials
from drive_attendance.clients.drive import DriveClient
from drive_attendance.clients.sheets import SheetsClient, a1_range

__all__ = ["GOOGLE_SCOPES", "load_credentials", "DriveClient", "SheetsClient", "a1_range"]
