"""Constants and defaults.

Note: Keep constants and user-facing messages here to avoid magic values spread across code.
"""

TOKEN_TTL_HOURS = 24
TOKEN_ALGORITHM = "HS256"

DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 100
TOP_BANK_STATS = 5

DEFAULT_UPSTREAM_BASE_URL = "https://worktime-dux3.onrender.com/api"
DEFAULT_UPSTREAM_TIMEOUT = 30.0
DEFAULT_DB_POOL_SIZE = 10

MSG_TOKEN_MISSING = "Token không được cung cấp"
MSG_TOKEN_INVALID = "Token không hợp lệ"
MSG_LOGIN_MISSING_FIELDS = "Vui lòng nhập tên đăng nhập và mật khẩu"
MSG_LOGIN_DENIED = "Tên đăng nhập hoặc mật khẩu không đúng"
MSG_LOGIN_OK = "Đăng nhập thành công"
MSG_SERVER_ERROR = "Lỗi server"
MSG_NOT_FOUND = "Không tìm thấy tài nguyên"
MSG_METHOD_NOT_ALLOWED = "Phương thức không được hỗ trợ"
MSG_INVALID_BODY = "Dữ liệu gửi lên không hợp lệ"

MSG_TRANSACTIONS_FAILED = "Lỗi khi tải danh sách giao dịch"
MSG_STATS_FAILED = "Lỗi khi tải thống kê giao dịch"

MSG_ORDERS_LIST_FAILED = "Lỗi khi tải danh sách đơn hàng"
MSG_ORDERS_CREATE_FAILED = "Lỗi khi tạo đơn hàng"
MSG_ORDERS_FROM_PRINTED_FAILED = "Lỗi khi tạo đơn hàng từ printed history"

MSG_ATTENDANCE_UPDATE_FAILED = "Cập nhật chấm công thất bại"
MSG_ATTENDANCE_UPDATE_ERROR = "Lỗi khi cập nhật chấm công"
MSG_INVALID_TIME = "Thời gian không hợp lệ"
MSG_CHECKOUT_BEFORE_CHECKIN = "checkOut phải sau checkIn"
