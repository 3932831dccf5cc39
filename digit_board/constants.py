# Hằng số cho bảng vẽ & bộ nhận dạng chữ số (có thể ghi đè qua tham số constructor)

# ---- nhận dạng ----
RESAMPLE_N = 64             # số điểm sau khi lấy mẫu lại
SQUARE_SIZE = 200.0         # cạnh hình vuông chuẩn hoá
MIN_POINTS = 10             # nét ít điểm hơn → coi là nhiễu
MIN_SIZE = 15.0             # cạnh lớn của bbox nhỏ hơn → coi là nhiễu
ACCEPT_THRESHOLD = 15.0     # điểm (khoảng cách TB) lớn hơn → không nhận
RECOGNITION_DELAY_MS = 10   # nhận dạng chạy sau khi nét đã được vẽ

# ---- bắt nét ----
MIN_POINT_DISTANCE = 1.0    # chỉ giữ điểm cách điểm trước > 1 đơn vị

# ---- giao diện ----
DEFAULT_PEN_WIDTH = 6
DEFAULT_PEN_RGBA = (0, 0, 0, 255)
GLYPH_RGBA = (17, 24, 39, 255)
CANVAS_W = 1600
CANVAS_H = 1000
