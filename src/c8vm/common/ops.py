# Dispatch masks, most specific first
M_BYTE = 0xF0FF     # group + low byte
M_NIB  = 0xF00F     # group + low nibble
M_HIGH = 0xF000     # group only

MASKS = (M_BYTE, M_NIB, M_HIGH)

# Control flow
SYS  = 0x0000  # 0NNN  machine code routine (ignored)
CLS  = 0x00E0  # 00E0  clear display
RET  = 0x00EE  # 00EE  PC <- [--SP]
JP   = 0x1000  # 1NNN  PC <- NNN
CALL = 0x2000  # 2NNN  [SP++] <- PC; PC <- NNN
SE   = 0x3000  # 3XNN  skip if VX == NN
SNE  = 0x4000  # 4XNN  skip if VX != NN
SER  = 0x5000  # 5XY0  skip if VX == VY
LD   = 0x6000  # 6XNN  VX <- NN
ADD  = 0x7000  # 7XNN  VX <- VX + NN, no carry

# Register to register
MOV  = 0x8000  # 8XY0  VX <- VY
OR   = 0x8001  # 8XY1  VX <- VX | VY
AND  = 0x8002  # 8XY2  VX <- VX & VY
XOR  = 0x8003  # 8XY3  VX <- VX ^ VY
ADDR = 0x8004  # 8XY4  VX <- VX + VY, VF <- carry
SUB  = 0x8005  # 8XY5  VX <- VX - VY, VF <- not borrow
SHR  = 0x8006  # 8XY6  VX <- VX >> 1, VF <- lsb
SUBN = 0x8007  # 8XY7  VX <- VY - VX, VF <- not borrow
SHL  = 0x800E  # 8XYE  VX <- VX << 1, VF <- msb

SNER = 0x9000  # 9XY0  skip if VX != VY
LDI  = 0xA000  # ANNN  I <- NNN
JPO  = 0xB000  # BNNN  PC <- V0 + NNN
RND  = 0xC000  # CXNN  VX <- rand & NN
DRW  = 0xD000  # DXYN  draw N rows from [I] at (VX, VY), VF <- collision

# Keypad
SKP  = 0xE09E  # EX9E  skip if key VX down
SKNP = 0xE0A1  # EXA1  skip if key VX up

# Timers and memory
LDDT = 0xF007  # FX07  VX <- DT
LDK  = 0xF00A  # FX0A  VX <- next key (blocking)
SDT  = 0xF015  # FX15  DT <- VX
SST  = 0xF018  # FX18  ST <- VX
ADDI = 0xF01E  # FX1E  I <- I + VX
LDF  = 0xF029  # FX29  I <- glyph(VX)
BCD  = 0xF033  # FX33  [I..I+2] <- BCD(VX)
STR  = 0xF055  # FX55  [I..I+X] <- V0..VX
LDR  = 0xF065  # FX65  V0..VX <- [I..I+X]
