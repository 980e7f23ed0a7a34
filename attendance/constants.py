ATTENDANCE_FILE = "attendance.txt"
FILE_ENCODING = "utf-8"
FIELD_SEPARATOR = ","
STATUS_PRESENT = "Present"
STATUS_ABSENT = "Absent"
MIN_SUMMARY_FIELDS = 3
MIN_DATED_FIELDS = 4
RECORDS_FOLDER = "records"
EXPORT_PREFIX = "attendance"
RECORDS_SHEET = "Records"
SUMMARY_SHEET = "Summary"
RECORDS_COLUMNS = ["No.", "Name", "Roll Number", "Status", "Date"]
SUMMARY_COLUMNS = ["Roll Number", "Present", "Absent", "Total", "% Present"]
HEADER_FILL = "D3D3D3"
PRESENT_FILL = "9BBB59"
ABSENT_FILL = "F4B183"
DATA_FILL = "F0F8FF"
