from c8vm.common.hwconf import DISPLAY_WIDTH, DISPLAY_HEIGHT


class Display:
    ''' 64x32 monochrome framebuffer with XOR sprite blits.

    Sprites that run off the right or bottom edge are clipped. With
    wrap=True every coordinate is taken modulo the display size instead,
    which some programs written for other interpreters expect.
    '''

    width: int
    height: int
    pixels: bytearray

    def __init__(self, wrap: bool = False, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT):
        self.wrap = wrap
        self.width = width
        self.height = height
        self.pixels = bytearray(width * height)

    def clear(self):
        self.pixels[:] = bytes(len(self.pixels))

    def get_pixel(self, x: int, y: int) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height):
            return False

        return self.pixels[y * self.width + x] == 1

    def draw(self, x: int, y: int, sprite: bytes) -> bool:
        ''' XOR sprite onto the screen, returns True if any lit pixel was turned off '''
        collision = False

        for row, bits in enumerate(sprite):
            sy = y + row

            if self.wrap:
                sy %= self.height
            elif sy >= self.height:
                continue

            for col in range(8):
                if not bits & (0x80 >> col):
                    continue

                sx = x + col

                if self.wrap:
                    sx %= self.width
                elif sx >= self.width:
                    continue

                index = sy * self.width + sx
                collision |= self.pixels[index] == 1
                self.pixels[index] ^= 1

        return collision

    def rows(self) -> list[list[bool]]:
        return [
            [self.pixels[y * self.width + x] == 1 for x in range(self.width)]
            for y in range(self.height)
        ]

    def __str__(self):
        return '\n'.join(''.join('#' if p else '.' for p in row) for row in self.rows())
